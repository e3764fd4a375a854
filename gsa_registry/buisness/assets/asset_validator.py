"""
Asset request validation
Checks API payloads for vehicles, equipment and furniture before they reach the database
"""

from datetime import date, datetime

from gsa_registry.buisness.gsa.gsa_codes import VEHICLE, EQUIPMENT, FURNITURE, validate_code


class AssetValidator:
    """Validation rules per asset category"""
    
    VEHICLE_TYPES = ('car', 'truck', 'motorcycle', 'bus', 'van', 'suv', 'pickup', 'tractor')
    VEHICLE_STATUSES = ('active', 'parked', 'maintenance', 'alert')
    EQUIPMENT_STATUSES = ('active', 'available', 'maintenance', 'retired', 'lost')
    FURNITURE_STATUSES = ('active', 'available', 'maintenance', 'retired', 'lost')
    CONDITIONS = ('excellent', 'good', 'fair', 'poor')
    MIN_VEHICLE_YEAR = 1990
    VIN_LENGTH = 17
    
    # (field, max length) pairs required on create
    REQUIRED_FIELDS = {
        VEHICLE: (('plateNumber', 20), ('make', 100), ('model', 100), ('vinNumber', 17), ('department', 255)),
        EQUIPMENT: (('name', 255), ('department', 255)),
        FURNITURE: (('name', 255), ('department', 255)),
    }
    
    @classmethod
    def validate(cls, asset_category, data, partial=False):
        """
        Validate an asset payload
        
        Args:
            asset_category (str): 'vehicle', 'equipment' or 'furniture'
            data (dict): camelCase request payload
            partial (bool): True for updates, where required fields may be omitted
        
        Returns:
            tuple: (is_valid, errors)
                is_valid (bool): True if the payload is acceptable
                errors (list): {"field", "message"} dicts, empty if valid
        """
        if not isinstance(data, dict):
            return False, [{'field': None, 'message': 'Request body must be a JSON object'}]
        
        errors = []
        
        for field, max_length in cls.REQUIRED_FIELDS[asset_category]:
            value = data.get(field)
            if value is None:
                if not partial:
                    errors.append({'field': field, 'message': f'{field} is required'})
                continue
            if not isinstance(value, str) or not value.strip():
                errors.append({'field': field, 'message': f'{field} must be a non-empty string'})
            elif len(value) > max_length:
                errors.append({'field': field, 'message': f'{field} must be at most {max_length} characters'})
        
        if asset_category == VEHICLE:
            errors.extend(cls._vehicle_errors(data))
        elif asset_category == EQUIPMENT:
            errors.extend(cls._equipment_errors(data))
        elif asset_category == FURNITURE:
            errors.extend(cls._furniture_errors(data))
        
        gsa_code = data.get('gsaCode')
        if gsa_code is not None and not validate_code(gsa_code):
            errors.append({'field': 'gsaCode', 'message': 'gsaCode must match GSA-<MAC>-<NN>-<NNN>'})
        
        manual_count = data.get('manualCount')
        if manual_count is not None and not cls._int_in_range(manual_count, 1, 999):
            errors.append({'field': 'manualCount', 'message': 'manualCount must be an integer between 1 and 999'})
        
        return len(errors) == 0, errors
    
    @classmethod
    def _vehicle_errors(cls, data):
        errors = []
        
        if 'vehicleType' in data and data['vehicleType'] not in cls.VEHICLE_TYPES:
            errors.append({'field': 'vehicleType', 'message': f"vehicleType must be one of {', '.join(cls.VEHICLE_TYPES)}"})
        
        if 'status' in data and data['status'] not in cls.VEHICLE_STATUSES:
            errors.append({'field': 'status', 'message': f"status must be one of {', '.join(cls.VEHICLE_STATUSES)}"})
        
        vin = data.get('vinNumber')
        if isinstance(vin, str) and vin.strip() and len(vin) != cls.VIN_LENGTH:
            errors.append({'field': 'vinNumber', 'message': f'vinNumber must be exactly {cls.VIN_LENGTH} characters'})
        
        if 'year' in data and not cls._int_in_range(data['year'], cls.MIN_VEHICLE_YEAR, datetime.utcnow().year + 1):
            errors.append({'field': 'year', 'message': f'year must be between {cls.MIN_VEHICLE_YEAR} and next year'})
        
        if 'fuelLevel' in data and not cls._int_in_range(data['fuelLevel'], 0, 100):
            errors.append({'field': 'fuelLevel', 'message': 'fuelLevel must be an integer between 0 and 100'})
        
        if 'mileage' in data and not cls._int_in_range(data['mileage'], 0, None):
            errors.append({'field': 'mileage', 'message': 'mileage must be a non-negative integer'})
        
        return errors
    
    @classmethod
    def _equipment_errors(cls, data):
        errors = []
        
        if 'status' in data and data['status'] not in cls.EQUIPMENT_STATUSES:
            errors.append({'field': 'status', 'message': f"status must be one of {', '.join(cls.EQUIPMENT_STATUSES)}"})
        
        if 'condition' in data and data['condition'] not in cls.CONDITIONS:
            errors.append({'field': 'condition', 'message': f"condition must be one of {', '.join(cls.CONDITIONS)}"})
        
        if data.get('purchaseDate') is not None and not cls._is_iso_date(data['purchaseDate']):
            errors.append({'field': 'purchaseDate', 'message': 'purchaseDate must be an ISO 8601 date'})
        
        price = data.get('purchasePrice')
        if price is not None and (isinstance(price, bool) or not isinstance(price, (int, float)) or price < 0):
            errors.append({'field': 'purchasePrice', 'message': 'purchasePrice must be a non-negative number'})
        
        return errors
    
    @classmethod
    def _furniture_errors(cls, data):
        errors = []
        
        if 'status' in data and data['status'] not in cls.FURNITURE_STATUSES:
            errors.append({'field': 'status', 'message': f"status must be one of {', '.join(cls.FURNITURE_STATUSES)}"})
        
        if 'condition' in data and data['condition'] not in cls.CONDITIONS:
            errors.append({'field': 'condition', 'message': f"condition must be one of {', '.join(cls.CONDITIONS)}"})
        
        if 'quantity' in data and not cls._int_in_range(data['quantity'], 1, None):
            errors.append({'field': 'quantity', 'message': 'quantity must be a positive integer'})
        
        return errors
    
    @staticmethod
    def _int_in_range(value, minimum, maximum):
        if isinstance(value, bool) or not isinstance(value, int):
            return False
        if minimum is not None and value < minimum:
            return False
        if maximum is not None and value > maximum:
            return False
        return True
    
    @staticmethod
    def _is_iso_date(value):
        if not isinstance(value, str):
            return False
        try:
            date.fromisoformat(value[:10])
        except ValueError:
            return False
        return True
