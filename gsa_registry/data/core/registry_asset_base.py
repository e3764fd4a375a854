from gsa_registry import db
from datetime import datetime
from gsa_registry.buisness.core.data_insertion_mixin import DataInsertionMixin


class RegistryAssetBase(db.Model, DataInsertionMixin):
    """Abstract base class for registered government assets (vehicles, equipment, furniture)"""
    
    __abstract__ = True
    
    # Set by subclasses
    asset_category = None
    id_manager = None
    
    id = db.Column(db.String(20), primary_key=True)
    department = db.Column(db.String(255), nullable=False, index=True)
    gsa_code = db.Column(db.String(20), unique=True, nullable=True, index=True)
    # Retired codes from earlier MAC assignments: [{"gsaCode", "department", "retiredAt"}]
    gsa_code_history = db.Column(db.JSON, nullable=False, default=list)
    status = db.Column(db.String(50), default='active')
    location = db.Column(db.String(255), nullable=True)
    notes = db.Column(db.Text, nullable=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
    
    protected_fields = ('id', 'gsa_code_history', 'created_at', 'updated_at')
    
    @property
    def class_label(self):
        """Label used to resolve this asset's GSA class code"""
        raise NotImplementedError
    
    def retire_gsa_code(self, retired_at=None):
        """Move the current GSA code into the history; codes are never reused or edited in place"""
        if not self.gsa_code:
            return None
        entry = {
            'gsaCode': self.gsa_code,
            'department': self.department,
            'retiredAt': (retired_at or datetime.utcnow()).isoformat(),
        }
        # Reassign so SQLAlchemy sees the JSON change
        self.gsa_code_history = list(self.gsa_code_history or []) + [entry]
        self.gsa_code = None
        return entry
