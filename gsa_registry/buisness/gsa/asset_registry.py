"""
Asset Registry
Read-only collaborators the GSA code generator consults for sequence counts and collisions.

Every registry answers ``query(asset_category)`` with a list of asset records (dicts) using the
API field names: at minimum ``id``, ``department`` and ``gsaCode``, plus ``vehicleType`` for vehicles.

Implementations:
- InMemoryAssetRegistry: lists held in memory (scripting and tests)
- DatabaseAssetRegistry: the local Flask-SQLAlchemy tables
- HttpAssetRegistry: a remote registry reached over the /api REST endpoints

Registries raise RegistryQueryError when a query cannot be completed; the generator
turns that into its fallback values.
"""

from abc import ABC, abstractmethod
from typing import Dict, Iterable, List, Optional

import httpx
from tenacity import Retrying, retry_if_exception_type, stop_after_attempt, wait_exponential

from gsa_registry.buisness.gsa.errors import RegistryQueryError
from gsa_registry.buisness.gsa.gsa_codes import ASSET_CATEGORIES, VEHICLE, EQUIPMENT, FURNITURE
from gsa_registry.logger import get_logger

logger = get_logger("gsa_registry.buisness.gsa.registry")

# REST collection path and envelope key per asset category
CATEGORY_COLLECTIONS = {
    VEHICLE: 'vehicles',
    EQUIPMENT: 'equipment',
    FURNITURE: 'furniture',
}


class AssetRegistry(ABC):
    """Read-only query interface over registered assets"""

    @abstractmethod
    def query(self, asset_category: str) -> List[Dict]:
        """
        Return all asset records of a category.
        
        Raises:
            RegistryQueryError: If the records cannot be read
        """
        pass

    @staticmethod
    def _check_category(asset_category):
        if asset_category not in ASSET_CATEGORIES:
            raise RegistryQueryError(asset_category, "unknown asset category")


class InMemoryAssetRegistry(AssetRegistry):
    """Registry backed by plain lists of record dicts"""

    def __init__(self, records: Optional[Dict[str, Iterable[Dict]]] = None):
        self._records = {category: [] for category in ASSET_CATEGORIES}
        for category, items in (records or {}).items():
            self._check_category(category)
            self._records[category].extend(dict(item) for item in items)

    def add(self, asset_category: str, record: Dict) -> Dict:
        self._check_category(asset_category)
        stored = dict(record)
        self._records[asset_category].append(stored)
        return stored

    def query(self, asset_category: str) -> List[Dict]:
        self._check_category(asset_category)
        return [dict(record) for record in self._records[asset_category]]


class DatabaseAssetRegistry(AssetRegistry):
    """
    Registry backed by the vehicle, equipment and furniture tables.
    Must be used inside a Flask application context.
    """

    def query(self, asset_category: str) -> List[Dict]:
        self._check_category(asset_category)
        from sqlalchemy.exc import SQLAlchemyError
        from gsa_registry.data.assets import model_for_category
        
        model = model_for_category(asset_category)
        try:
            return [asset.to_dict() for asset in model.query.order_by(model.id).all()]
        except SQLAlchemyError as e:
            raise RegistryQueryError(asset_category, str(e)) from e


class HttpAssetRegistry(AssetRegistry):
    """
    Registry reached over HTTP.
    
    Reads GET {base_url}/api/<collection>, which answers with an envelope of the form
    {"success": true, "<collection>": [...], "total": n, "offset": o, "limit": l}.
    Pages through limit/offset until every record is read.
    """

    PAGE_SIZE = 1000

    def __init__(self, base_url: str, timeout: float = 5.0, max_attempts: int = 3,
                 client: Optional[httpx.Client] = None):
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        self.max_attempts = max(1, int(max_attempts))
        self._client = client

    def _get_page(self, client: httpx.Client, collection: str, offset: int) -> Dict:
        retry = Retrying(
            reraise=True,
            stop=stop_after_attempt(self.max_attempts),
            wait=wait_exponential(multiplier=0.2, max=2.0),
            retry=retry_if_exception_type(httpx.TransportError),
        )
        for attempt in retry:
            with attempt:
                response = client.get(
                    f"{self.base_url}/api/{collection}",
                    params={'limit': self.PAGE_SIZE, 'offset': offset},
                )
                response.raise_for_status()
                return response.json()
        raise RuntimeError("Retry loop exited unexpectedly")

    def _read_all(self, client: httpx.Client, asset_category: str) -> List[Dict]:
        collection = CATEGORY_COLLECTIONS[asset_category]
        records = []
        
        while True:
            payload = self._get_page(client, collection, len(records))
            if not isinstance(payload, dict) or not payload.get('success'):
                raise RegistryQueryError(asset_category, "response envelope is not successful")
            
            page = payload.get(collection)
            if not isinstance(page, list):
                raise RegistryQueryError(asset_category, f"response is missing the '{collection}' list")
            
            if not all(isinstance(record, dict) for record in page):
                raise RegistryQueryError(asset_category, f"'{collection}' must hold JSON objects")

            records.extend(page)
            total = payload.get('total', len(records))
            if isinstance(total, bool) or not isinstance(total, int):
                raise RegistryQueryError(asset_category, f"response 'total' is not an integer: {total!r}")
            if not page or len(records) >= total:
                return records

    def query(self, asset_category: str) -> List[Dict]:
        self._check_category(asset_category)
        try:
            if self._client is not None:
                return self._read_all(self._client, asset_category)
            with httpx.Client(timeout=self.timeout) as client:
                return self._read_all(client, asset_category)
        except RegistryQueryError:
            raise
        except (httpx.HTTPError, ValueError) as e:
            logger.warning(f"HTTP registry query for {asset_category} at {self.base_url} failed: {e}")
            raise RegistryQueryError(asset_category, str(e)) from e
