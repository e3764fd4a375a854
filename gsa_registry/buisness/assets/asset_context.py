"""
Asset Context
Lifecycle of registered assets and their GSA codes.

Handles:
- Registration with automatic or manual GSA code assignment
- Partial updates with GSA code collision checks
- Transfer between MACs (new code issued, old code retired to history)
- Deletion

GSA codes are immutable once assigned. A transfer never edits a code in place; the old
code moves to gsa_code_history and a new code for the destination MAC is issued.

Code assignment reads the current count and inserts the asset under one process-wide
lock, so registrations served by this process cannot race each other for a sequence
number. Writers in other processes can still race; the unique constraint on gsa_code
turns such a race into a conflict error instead of a duplicate.
"""

import threading
from typing import List, Optional, Set, Tuple

from sqlalchemy.exc import IntegrityError

from gsa_registry import db
from gsa_registry.buisness.assets.asset_validator import AssetValidator
from gsa_registry.buisness.assets.errors import (
    AssetConflictError,
    AssetNotFoundError,
    AssetValidationError,
    DuplicateGSACodeError,
)
from gsa_registry.buisness.gsa.asset_registry import AssetRegistry, DatabaseAssetRegistry
from gsa_registry.buisness.gsa.errors import InvalidManualCountError
from gsa_registry.buisness.gsa.gsa_code_generator import check_manual_count, code_exists, generate_asset_code
from gsa_registry.buisness.gsa.gsa_codes import MAX_SEQUENCE_COUNT, build_code, describe_code, mac_code_for, parse_code, validate_code
from gsa_registry.data.assets import model_for_category
from gsa_registry.data.core.registry_asset_base import RegistryAssetBase
from gsa_registry.logger import get_logger

logger = get_logger("gsa_registry.buisness.assets.context")


class AssetContext:
    """
    Context for one registered asset.
    
    Provides a clean interface for:
    - Loading an asset by category and id
    - Creating assets with GSA code assignment (classmethod create)
    - Updating, transferring and deleting the asset
    """
    
    _registration_lock = threading.Lock()
    
    def __init__(self, asset: RegistryAssetBase, registry: Optional[AssetRegistry] = None):
        self._asset = asset
        self._registry = registry or DatabaseAssetRegistry()
    
    @classmethod
    def load(cls, asset_category: str, asset_id: str, registry: Optional[AssetRegistry] = None) -> 'AssetContext':
        """
        Load an asset by id.
        
        Raises:
            AssetNotFoundError: If no asset of the category has this id
        """
        model = model_for_category(asset_category)
        asset = db.session.get(model, asset_id)
        if asset is None:
            raise AssetNotFoundError(asset_category, asset_id)
        return cls(asset, registry)
    
    @property
    def asset(self) -> RegistryAssetBase:
        return self._asset
    
    @property
    def asset_id(self) -> str:
        return self._asset.id
    
    @property
    def asset_category(self) -> str:
        return self._asset.asset_category
    
    @property
    def gsa_code_history(self) -> List[dict]:
        return list(self._asset.gsa_code_history or [])
    
    @property
    def gsa_code_description(self) -> Optional[str]:
        if not self._asset.gsa_code:
            return None
        return describe_code(self._asset.gsa_code)
    
    @classmethod
    def create(cls, asset_category: str, data: dict,
               registry: Optional[AssetRegistry] = None) -> Tuple['AssetContext', List[str]]:
        """
        Register a new asset.
        
        A supplied gsaCode is used as-is after a collision check. Without one, a code is
        generated for the asset's department and class (manualCount overrides the count).
        An unrecognized department gets no code; the asset is still registered and a
        warning is returned for the operator. The same happens when no free count is left
        for a generated code. Registry failures never block registration: taken codes are
        then read from the local tables.
        
        Args:
            asset_category: 'vehicle', 'equipment' or 'furniture'
            data: camelCase payload
            registry: Registry for counts and collision checks (default: local database)
            
        Returns:
            tuple: (AssetContext, warnings)
            
        Raises:
            AssetValidationError: If the payload is invalid
            DuplicateGSACodeError: If the GSA code is already assigned
            AssetConflictError: If another unique attribute is already taken
        """
        is_valid, errors = AssetValidator.validate(asset_category, data)
        if not is_valid:
            raise AssetValidationError(errors)
        
        model = model_for_category(asset_category)
        registry = registry or DatabaseAssetRegistry()
        warnings = []
        
        with cls._registration_lock:
            asset = model.from_dict(data, skip_fields=model.protected_fields)
            gsa_code = data.get('gsaCode')
            manual_count = data.get('manualCount')
            
            if gsa_code:
                if cls._code_taken(gsa_code, model, registry):
                    raise DuplicateGSACodeError(gsa_code)
            elif mac_code_for(asset.department):
                gsa_code = generate_asset_code(
                    asset.department,
                    asset_category,
                    asset.class_label,
                    registry,
                    manual_count=manual_count
                )
                if manual_count is not None:
                    if cls._code_taken(gsa_code, model, registry):
                        raise DuplicateGSACodeError(gsa_code)
                else:
                    gsa_code = cls._advance_past_taken(gsa_code, asset_category, registry)
                    if not validate_code(gsa_code) or cls._code_taken(gsa_code, model, registry):
                        # The asset is still registered; an operator assigns its code later
                        warnings.append(f"Generated GSA code {gsa_code} is not available. Asset registered without a GSA code.")
                        logger.warning(f"Generated GSA code {gsa_code} for new {asset_category} is not available, registering without a code")
                        gsa_code = None
            else:
                warnings.append(f"MAC not recognized: {asset.department}. Asset registered without a GSA code.")
                logger.warning(f"Registering {asset_category} for unrecognized MAC {asset.department!r} without a GSA code")
            
            asset.gsa_code = gsa_code or None
            asset.gsa_code_history = []
            asset.id = model.id_manager.get_next_asset_id()
            
            cls._commit(asset, add=True)
        
        logger.info(f"Registered {asset_category} {asset.id} with GSA code {asset.gsa_code}")
        return cls(asset, registry), warnings
    
    def update(self, data: dict) -> List[str]:
        """
        Apply a partial update.
        
        The department cannot change here; use transfer so the GSA code follows the MAC.
        
        Returns:
            list: Changed column names
            
        Raises:
            AssetValidationError: If the payload is invalid
            DuplicateGSACodeError: If a new gsaCode is already assigned elsewhere
        """
        is_valid, errors = AssetValidator.validate(self.asset_category, data, partial=True)
        if 'department' in data and data['department'] != self._asset.department:
            errors = errors + [{'field': 'department', 'message': 'Use the transfer endpoint to move an asset to another MAC'}]
            is_valid = False
        if not is_valid:
            raise AssetValidationError(errors)
        
        with self._registration_lock:
            new_code = data.get('gsaCode')
            if new_code and new_code != self._asset.gsa_code:
                if self._code_taken(new_code, type(self._asset), self._registry, exclude_id=self.asset_id):
                    raise DuplicateGSACodeError(new_code)
            
            # A null gsaCode never clears an assigned code
            skip_fields = ['gsa_code'] if data.get('gsaCode') is None else []
            changed = self._asset.apply_dict(data, skip_fields=skip_fields)
            self._commit(self._asset)
        
        logger.info(f"Updated {self.asset_category} {self.asset_id}: {', '.join(changed) or 'no changes'}")
        return changed
    
    def transfer(self, department: str, manual_count: Optional[int] = None) -> dict:
        """
        Transfer the asset to another MAC.
        
        Args:
            department: Destination MAC name
            manual_count: Optional count override for the new code
            
        Returns:
            dict: {"previousGsaCode", "gsaCode", "previousDepartment", "department"}
            
        Raises:
            AssetValidationError: If the destination is missing, unchanged or not a known MAC
            DuplicateGSACodeError: If the new code is already assigned
            AssetConflictError: If every count for the destination class is taken
        """
        errors = []
        if not isinstance(department, str) or not department.strip():
            errors.append({'field': 'department', 'message': 'department is required'})
        elif department == self._asset.department:
            errors.append({'field': 'department', 'message': 'Asset already belongs to this MAC'})
        elif not mac_code_for(department):
            errors.append({'field': 'department', 'message': f'MAC not recognized: {department}'})
        if manual_count is not None:
            try:
                check_manual_count(manual_count)
            except InvalidManualCountError as e:
                errors.append({'field': 'manualCount', 'message': str(e)})
        if errors:
            raise AssetValidationError(errors)
        
        previous_department = self._asset.department
        previous_code = self._asset.gsa_code
        
        with self._registration_lock:
            new_code = generate_asset_code(
                department,
                self.asset_category,
                self._asset.class_label,
                self._registry,
                manual_count=manual_count
            )
            if manual_count is None:
                new_code = self._advance_past_taken(new_code, self.asset_category, self._registry, exclude_id=self.asset_id)
                if not validate_code(new_code):
                    raise AssetConflictError(f"No free GSA code left in {department} for this asset class")
            if self._code_taken(new_code, type(self._asset), self._registry, exclude_id=self.asset_id):
                raise DuplicateGSACodeError(new_code)
            
            self._asset.retire_gsa_code()
            self._asset.department = department
            self._asset.gsa_code = new_code
            self._commit(self._asset)
        
        logger.info(f"Transferred {self.asset_category} {self.asset_id} from {previous_department} to {department}: {previous_code} -> {new_code}")
        return {
            'previousGsaCode': previous_code,
            'gsaCode': new_code,
            'previousDepartment': previous_department,
            'department': department,
        }
    
    def delete(self):
        """Delete the asset"""
        try:
            db.session.delete(self._asset)
            db.session.commit()
        except Exception:
            db.session.rollback()
            raise
        logger.info(f"Deleted {self.asset_category} {self.asset_id}")
    
    @staticmethod
    def _commit(asset, add=False):
        try:
            if add:
                db.session.add(asset)
            db.session.commit()
        except IntegrityError as e:
            db.session.rollback()
            logger.warning(f"Unique constraint violated for {asset!r}: {e.orig}")
            raise AssetConflictError(f"{asset.asset_category.title()} conflicts with an existing record (duplicate unique field)") from e
        except Exception:
            db.session.rollback()
            raise
    
    @staticmethod
    def _assigned_codes(asset_category: str, registry: AssetRegistry,
                        exclude_id: Optional[str] = None) -> Set[str]:
        """
        GSA codes held by assets of the category, in the registry or the local table.
        
        An unreadable source is logged and skipped, so a registry outage leaves the
        local codes to steer generation.
        """
        sources = [registry]
        if not isinstance(registry, DatabaseAssetRegistry):
            sources.append(DatabaseAssetRegistry())
        
        taken = set()
        for source in sources:
            try:
                records = source.query(asset_category)
            except Exception as e:
                logger.error(f"Could not read assigned {asset_category} codes from {type(source).__name__}: {e}", exc_info=True)
                continue
            taken.update(
                record.get('gsaCode') for record in records
                if isinstance(record, dict) and (exclude_id is None or record.get('id') != exclude_id)
            )
        taken.discard(None)
        return taken
    
    @classmethod
    def _advance_past_taken(cls, gsa_code: str, asset_category: str, registry: AssetRegistry,
                            exclude_id: Optional[str] = None) -> str:
        """
        Move a generated code forward to the first free count.
        
        Counts derive from how many assets a MAC holds, so once an asset leaves a MAC the
        next generated count can land on a code that is still assigned. The same happens
        when the registry is down and the count falls back to 1.
        """
        taken = cls._assigned_codes(asset_category, registry, exclude_id)
        
        components = parse_code(gsa_code)
        count = components.count
        while gsa_code in taken and count < MAX_SEQUENCE_COUNT:
            count += 1
            gsa_code = build_code(components.prefix, components.mac_code, components.class_code, count)
        return gsa_code
    
    @staticmethod
    def _code_taken(gsa_code: str, model, registry: AssetRegistry, exclude_id: Optional[str] = None) -> bool:
        """Collision check against the registry and the local table the insert must satisfy"""
        if code_exists(gsa_code, model.asset_category, registry, exclude_id=exclude_id):
            return True
        query = model.query.filter(model.gsa_code == gsa_code)
        if exclude_id is not None:
            query = query.filter(model.id != exclude_id)
        return query.first() is not None
