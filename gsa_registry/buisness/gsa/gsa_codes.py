"""
GSA Codes
Construction, parsing, validation and description of GSA asset codes.

A GSA code labels a government asset as ``GSA-<MAC>-<CLASS>-<COUNT>``, e.g. ``GSA-MOH-02-001``:
- MAC: 2-4 letter code of the owning Ministry, Agency or Commission
- CLASS: 2 digit asset class code within the asset category
- COUNT: 1-based sequence number within (MAC, class), zero-padded to 3 digits

Everything in this module is pure. Lookups never raise; unknown inputs resolve to
the documented fallback values so the registration flow stays usable.
"""

import re
from dataclasses import dataclass
from typing import Optional


GSA_PREFIX = 'GSA'
GSA_CODE_PATTERN = re.compile(r'^GSA-[A-Z]{2,4}-[0-9]{2}-[0-9]{3}$')
INVALID_CODE_DESCRIPTION = 'Invalid GSA Code'

# Counts are padded to 3 digits, so each (MAC, class) pair holds at most 999 assets
MAX_SEQUENCE_COUNT = 999

VEHICLE = 'vehicle'
EQUIPMENT = 'equipment'
FURNITURE = 'furniture'
ASSET_CATEGORIES = (VEHICLE, EQUIPMENT, FURNITURE)

MAC_CODES = {
    'Ministry of Health': 'MOH',
    'Ministry of Justice': 'MOJ',
    'Ministry of Agriculture': 'MOA',
    'Ministry of Defense': 'MOD',
    'Ministry of Education': 'MOE',
    'General Services Agency': 'GSA',
    'Ministry of Finance': 'MOF',
    'Ministry of Public Works': 'MPW',
    'Ministry of Transport': 'MOT',
    'Ministry of Internal Affairs': 'MIA',
}

VEHICLE_CLASS_CODES = {
    'Yellow Machine': '01',
    'Sedan': '02',
    'SUV': '03',
    'Bus': '04',
    'Pickup': '05',
    'Truck': '06',
    'Tractor': '07',
}

EQUIPMENT_CLASS_CODES = {
    'Computer': '01',
    'Printer': '02',
    'Server': '03',
    'Network Equipment': '04',
    'Audio Visual': '05',
    'Medical Equipment': '06',
    'Laboratory Equipment': '07',
    'Communication Equipment': '08',
    'Security Equipment': '09',
    'Other Equipment': '10',
}

FURNITURE_CLASS_CODES = {
    'Desk': '01',
    'Chair': '02',
    'Table': '03',
    'Cabinet': '04',
    'Shelf': '05',
    'Sofa': '06',
    'Bed': '07',
    'Storage': '08',
    'Conference Table': '09',
    'Other Furniture': '10',
}

DEFAULT_VEHICLE_CLASS_CODE = VEHICLE_CLASS_CODES['Sedan']
DEFAULT_EQUIPMENT_CLASS_CODE = EQUIPMENT_CLASS_CODES['Other Equipment']
DEFAULT_FURNITURE_CLASS_CODE = FURNITURE_CLASS_CODES['Other Furniture']

# Freeform vehicle type tokens (as stored on vehicle records) -> vehicle class code.
# Class labels are accepted as well so "Yellow Machine" resolves to its own class.
VEHICLE_TYPE_CLASS_CODES = {label.lower(): code for label, code in VEHICLE_CLASS_CODES.items()}
VEHICLE_TYPE_CLASS_CODES.update({
    'car': '02',
    'sedan': '02',
    'suv': '03',
    'bus': '04',
    'pickup': '05',
    'truck': '06',
    'van': '05',
    'motorcycle': '01',
    'tractor': '07',
})

_LEADING_INTEGER = re.compile(r'^\s*([+-]?[0-9]+)')


@dataclass(frozen=True)
class GSACode:
    """Structured GSA asset code"""

    prefix: str
    mac_code: str
    class_code: str
    count: int

    def __str__(self):
        return build_code(self.prefix, self.mac_code, self.class_code, self.count)

    def to_dict(self):
        return {
            'prefix': self.prefix,
            'macCode': self.mac_code,
            'classCode': self.class_code,
            'count': self.count,
        }


def build_code(prefix: str, mac_code: str, class_code: str, count: int) -> str:
    """
    Format GSA code components into the canonical string.
    
    Counts above 999 are not wrapped; they render with more than 3 digits and
    the result then fails validate_code.
    
    Args:
        prefix: Code prefix, normally "GSA"
        mac_code: MAC code (MOH, MOJ, ...)
        class_code: 2 digit class code
        count: Sequence number within (MAC, class)
        
    Returns:
        str: e.g. "GSA-MOH-02-001"
    """
    return f"{prefix}-{mac_code}-{class_code}-{count:03d}"


def _parse_count(segment: str) -> int:
    # Leading-integer parse over ASCII digits: "007" -> 7, "12x" -> 12, "abc" -> 0
    match = _LEADING_INTEGER.match(segment)
    if not match:
        return 0
    return int(match.group(1))


def parse_code(code) -> Optional[GSACode]:
    """
    Best-effort decomposition of a GSA code string.
    
    Any string with exactly four dash-separated segments parses; the shape of the
    segments is not checked (use validate_code for that). A count segment without
    leading digits parses as 0.
    
    Args:
        code: Code string
        
    Returns:
        GSACode, or None if the input does not have four segments
    """
    if not isinstance(code, str):
        return None
    
    parts = code.split('-')
    if len(parts) != 4:
        return None
    
    return GSACode(
        prefix=parts[0],
        mac_code=parts[1],
        class_code=parts[2],
        count=_parse_count(parts[3])
    )


def validate_code(code) -> bool:
    """Authoritative well-formedness check against the canonical pattern"""
    if not isinstance(code, str):
        return False
    return GSA_CODE_PATTERN.fullmatch(code) is not None


def mac_code_for(mac_name: str) -> str:
    """Get MAC code from MAC name, empty string when the MAC is not recognized"""
    return MAC_CODES.get(mac_name, '') if isinstance(mac_name, str) else ''


def mac_name_for(mac_code: str) -> Optional[str]:
    """Reverse lookup of the MAC name for a MAC code"""
    for name, code in MAC_CODES.items():
        if code == mac_code:
            return name
    return None


def vehicle_class_code_for(vehicle_type: str) -> str:
    """Get vehicle class code from a vehicle type token (case-insensitive), defaults to Sedan"""
    if not isinstance(vehicle_type, str):
        return DEFAULT_VEHICLE_CLASS_CODE
    return VEHICLE_TYPE_CLASS_CODES.get(vehicle_type.strip().lower(), DEFAULT_VEHICLE_CLASS_CODE)


def equipment_class_code_for(class_name: str) -> str:
    return EQUIPMENT_CLASS_CODES.get(class_name, DEFAULT_EQUIPMENT_CLASS_CODE) if isinstance(class_name, str) else DEFAULT_EQUIPMENT_CLASS_CODE


def furniture_class_code_for(class_name: str) -> str:
    return FURNITURE_CLASS_CODES.get(class_name, DEFAULT_FURNITURE_CLASS_CODE) if isinstance(class_name, str) else DEFAULT_FURNITURE_CLASS_CODE


def class_code_for(asset_category: str, class_label: str) -> str:
    """
    Resolve the class code for a class label within an asset category.
    
    Args:
        asset_category: 'vehicle', 'equipment' or 'furniture'
        class_label: Class name or vehicle type token
        
    Returns:
        str: 2 digit class code, or '' for an unknown category
    """
    if asset_category == VEHICLE:
        return vehicle_class_code_for(class_label)
    if asset_category == EQUIPMENT:
        return equipment_class_code_for(class_label)
    if asset_category == FURNITURE:
        return furniture_class_code_for(class_label)
    return ''


def describe_code(code) -> str:
    """
    Human readable description of a GSA code.
    
    Example:
        >>> describe_code("GSA-MOH-02-001")
        'Ministry of Health - Asset #1 in class 02'
    """
    components = parse_code(code)
    if components is None:
        return INVALID_CODE_DESCRIPTION
    
    mac_name = mac_name_for(components.mac_code) or components.mac_code
    return f"{mac_name} - Asset #{components.count} in class {components.class_code}"
