#!/usr/bin/env python3
"""
Build orchestrator for the GSA asset registry
Creates tables and id sequences, then optionally inserts debug data
"""

from pathlib import Path
import json

from gsa_registry import create_app, db
from gsa_registry.logger import get_logger

logger = get_logger("gsa_registry.build")

DEBUG_DATA_FILE = Path(__file__).parent / 'data' / 'assets' / 'build_data_debug.json'


def build_models():
    """
    Create asset tables and their id sequence tables
    """
    from gsa_registry.data.core.sequences import VehicleIDManager, EquipmentIDManager, FurnitureIDManager
    
    logger.info("Building asset tables")
    db.create_all()
    
    for manager in (VehicleIDManager, EquipmentIDManager, FurnitureIDManager):
        manager.create_sequence_if_not_exists()
        logger.debug(f"Sequence ready: {manager.get_sequence_table_name()}")


def debug_data_present():
    """
    Check whether any assets are already registered
    
    Returns:
        bool: True if at least one vehicle, equipment or furniture row exists
    """
    from gsa_registry.data.assets import model_for_category
    from gsa_registry.buisness.gsa.gsa_codes import ASSET_CATEGORIES
    
    return any(model_for_category(category).query.first() is not None for category in ASSET_CATEGORIES)


def insert_debug_data(data_file=DEBUG_DATA_FILE):
    """
    Register the debug assets through the normal registration path so they receive GSA codes
    
    Args:
        data_file (Path): JSON file keyed by asset category
    
    Returns:
        dict: Number of assets inserted per category
    
    Raises:
        FileNotFoundError: If the data file is missing
    """
    from gsa_registry.buisness.assets.asset_context import AssetContext
    
    if not Path(data_file).exists():
        error_msg = f"Debug data file not found: {data_file}"
        logger.error(error_msg)
        raise FileNotFoundError(error_msg)
    
    if debug_data_present():
        logger.info("Assets already present, skipping debug data")
        return {}
    
    with open(data_file, 'r', encoding='utf-8') as f:
        debug_data = json.load(f)
    
    summary = {}
    for asset_category, records in debug_data.items():
        for record in records:
            context, warnings = AssetContext.create(asset_category, record)
            for warning in warnings:
                logger.warning(warning)
            logger.debug(f"Inserted debug {asset_category} {context.asset_id} ({context.asset.gsa_code})")
        summary[asset_category] = len(records)
        logger.info(f"Inserted {len(records)} debug {asset_category} records")
    
    return summary


def build_database(enable_debug_data=True, app=None):
    """
    Main build entry point
    
    Args:
        enable_debug_data (bool): Whether to insert debug data (default: True)
        app: Flask app to build against (default: a new app from the environment)
    """
    app = app or create_app()
    
    with app.app_context():
        logger.info(f"Starting database build (debug data: {enable_debug_data})")
        build_models()
        
        if enable_debug_data:
            try:
                insert_debug_data()
            except Exception as e:
                logger.error(f"Debug data insertion failed: {e}")
                raise
        
        logger.info("Database build completed successfully")
