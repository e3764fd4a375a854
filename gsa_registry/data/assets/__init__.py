"""
Registered asset models, one table per asset category
"""


def model_for_category(asset_category):
    """
    Get the model class for an asset category
    
    Raises:
        ValueError: If the category is unknown
    """
    from gsa_registry.data.assets.vehicle import Vehicle
    from gsa_registry.data.assets.equipment import Equipment
    from gsa_registry.data.assets.furniture import Furniture
    
    models = {
        'vehicle': Vehicle,
        'equipment': Equipment,
        'furniture': Furniture,
    }
    if asset_category not in models:
        raise ValueError(f"Unknown asset category: {asset_category}")
    return models[asset_category]
