# Binance Chain DEX REST connector

import requests
from typing import Dict, Any, Optional, Iterator, List
from datetime import datetime, timedelta, timezone

from .base import BaseIngestion, IngestionError


MAINNET_URL = 'https://dex.binance.org'
TESTNET_URL = 'https://testnet-dex.binance.org'

# The transactions endpoint caps page size and only serves 3 months per query
MAX_PAGE_SIZE = 1000
MAX_QUERY_WINDOW = timedelta(days=90)


class BinanceDexIngestion(BaseIngestion):

    def __init__(self, config: Dict[str, Any]):
        self.session = None
        self.baseUrl = None
        super().__init__(config)

    def _initializeClient(self) -> None:
        network = self.config.get('network', 'mainnet')
        self.baseUrl = self.config.get('base_url') or (TESTNET_URL if network == 'testnet' else MAINNET_URL)
        self.baseUrl = self.baseUrl.rstrip('/')
        self.timeout = self.config.get('timeout', 10)
        self.pageSize = min(int(self.config.get('limit', MAX_PAGE_SIZE)), MAX_PAGE_SIZE)

        self.session = requests.Session()
        self.session.headers.update({'Accept': 'application/json'})

        self.logger.info(f"Binance DEX client initialized ({self.baseUrl})")

    def getRequiredFields(self) -> List[str]:
        return ['network']

    def _get(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        url = f"{self.baseUrl}{path}"
        try:
            response = self.session.get(url, params=params, timeout=self.timeout)
            response.raise_for_status()
            return response.json()
        except (requests.RequestException, ValueError) as e:
            self.handleError(e, f"GET {path}")
            raise IngestionError(f"Request to {path} failed: {e}") from e

    def testConnection(self) -> bool:
        try:
            info = self._get('/api/v1/node-info')
            network = info.get('node_info', {}).get('network')
            self.logger.info(f"Binance DEX connection successful. Network: {network}")
            return True
        except IngestionError:
            return False

    def fetchTransactions(
        self,
        address: str,
        startTime: Optional[datetime] = None,
        endTime: Optional[datetime] = None,
        filters: Optional[Dict[str, Any]] = None
    ) -> Iterator[Dict[str, Any]]:
        if not endTime:
            endTime = datetime.now(timezone.utc)
        if not startTime:
            startTime = endTime - MAX_QUERY_WINDOW

        if endTime - startTime > MAX_QUERY_WINDOW:
            self.logger.warning(f"Query window exceeds {MAX_QUERY_WINDOW.days} days, clamping start time")
            startTime = endTime - MAX_QUERY_WINDOW

        params = {
            'address': address,
            'startTime': int(startTime.timestamp() * 1000),
            'endTime': int(endTime.timestamp() * 1000),
            'limit': self.pageSize,
            'offset': 0
        }
        for key in ('txType', 'txAsset', 'side'):
            if filters and filters.get(key):
                params[key] = filters[key]

        while True:
            page = self._get('/api/v1/transactions', params=dict(params))
            rows = page.get('tx', []) if isinstance(page, dict) else []

            self.logger.debug(f"Fetched {len(rows)} tx(s) at offset {params['offset']}")
            yield from rows

            if len(rows) < self.pageSize:
                break
            params['offset'] += len(rows)

        self.lastIngestionTime = datetime.now(timezone.utc)

    def fetchTx(self, txHash: str) -> Dict[str, Any]:
        return self._get(f"/api/v1/tx/{txHash}", params={'format': 'json'})

    def fetchFees(self) -> List[Dict[str, Any]]:
        fees = self._get('/api/v1/fees')
        if not isinstance(fees, list):
            raise IngestionError(f"Unexpected fees response: {type(fees).__name__}")
        return fees
