"""
Generic data insertion mixin for SQLAlchemy models
Provides from_dict and to_dict methods that speak the API's camelCase field names

The registry API (and the remote registries the GSA code generator reads) exchange
records such as {"plateNumber": ..., "gsaCode": ...}; model columns are snake_case.
"""

import re
from datetime import date, datetime
from sqlalchemy import inspect

_CAMEL_BOUNDARY = re.compile(r'(?<!^)(?=[A-Z])')


def to_camel_case(name):
    head, *tail = name.split('_')
    return head + ''.join(part.title() for part in tail)


def to_snake_case(name):
    return _CAMEL_BOUNDARY.sub('_', name).lower()


class DataInsertionMixin:
    """
    Mixin that provides generic data insertion capabilities for SQLAlchemy models
    
    This mixin adds:
    - from_dict(): Create model instance from an API (camelCase) or column (snake_case) dictionary
    - apply_dict(): Apply a partial update from a dictionary
    - to_dict(): Convert model instance to an API dictionary
    """
    
    # Columns never written from request data
    protected_fields = ('id', 'created_at', 'updated_at')
    
    @classmethod
    def column_data(cls, data_dict, skip_fields=None):
        """
        Filter a dictionary down to known model columns, keyed by column name
        
        Args:
            data_dict (dict): camelCase or snake_case keyed data
            skip_fields (list, optional): Column names to drop
            
        Returns:
            dict: column name -> value
        """
        skip_fields = set(skip_fields or [])
        columns = {c.key for c in inspect(cls).columns}
        
        filtered_data = {}
        for key, value in data_dict.items():
            column = key if key in columns else to_snake_case(key)
            if column in columns and column not in skip_fields:
                filtered_data[column] = value
        return filtered_data
    
    @classmethod
    def from_dict(cls, data_dict, skip_fields=None):
        """
        Create a model instance from a dictionary (not saved to database)
        """
        return cls(**cls.column_data(data_dict, skip_fields))
    
    def apply_dict(self, data_dict, skip_fields=None):
        """
        Apply a partial update; protected fields are never overwritten
        
        Returns:
            list: Column names that were changed
        """
        skip = set(skip_fields or []) | set(self.protected_fields)
        changed = []
        for column, value in self.column_data(data_dict, skip).items():
            if getattr(self, column) != value:
                setattr(self, column, value)
                changed.append(column)
        return changed
    
    def to_dict(self, include_audit_fields=True):
        """
        Convert model instance to an API dictionary with camelCase keys
        
        Args:
            include_audit_fields (bool): Whether to include created_at/updated_at
            
        Returns:
            dict: Dictionary representation of the model
        """
        result = {}
        
        for column in inspect(self.__class__).columns:
            if not include_audit_fields and column.key in ('created_at', 'updated_at'):
                continue
            
            value = getattr(self, column.key)
            if isinstance(value, (datetime, date)):
                value = value.isoformat()
            result[to_camel_case(column.key)] = value
        
        return result
    
