from typing import Dict, Any, Optional
import logging


class FieldMapper:

    def __init__(self):
        """Initialize field mapper with predefined mappings."""
        self.logger = logging.getLogger(self.__class__.__name__)
        self._initializeMappings()

    def _initializeMappings(self) -> None:
        """Initialize field mapping configurations for each payload kind."""

        # WebSocket transfer stream (<address> / transfers)
        self.wsTransferMapping = {
            'eventType': 'data.e',
            'eventHeight': 'data.E',
            'hash': 'data.H',
            'memo': 'data.M',
            'fromAddr': 'data.f',
            'outputs': 'data.t'
        }

        # REST /api/v1/transactions rows
        self.restTransactionMapping = {
            'txHash': 'txHash',
            'blockHeight': 'blockHeight',
            'txType': 'txType',
            'timeStamp': 'timeStamp',
            'fromAddr': 'fromAddr',
            'toAddr': 'toAddr',
            'value': 'value',
            'txAsset': 'txAsset',
            'txFee': 'txFee',
            'memo': 'memo',
            'code': 'code'
        }

    def mapFields(
        self,
        source_data: Dict[str, Any],
        mapping: Dict[str, str]
    ) -> Dict[str, Any]:
        mappedData = {}

        for target_field, source_path in mapping.items():
            value = self.extractNestedField(source_data, source_path)
            if value is not None:
                mappedData[target_field] = value

        return mappedData

    def extractNestedField(
        self,
        data: Optional[Dict[str, Any]],
        field_path: str
    ) -> Optional[Any]:
        keys = field_path.split('.')
        value = data

        for key in keys:
            if isinstance(value, dict):
                value = value.get(key)
            else:
                return None

            if value is None:
                return None

        return value

    def getMappingForSource(self, source: str) -> Dict[str, str]:
        mappingMap = {
            'ws_transfer': self.wsTransferMapping,
            'rest_transaction': self.restTransactionMapping
        }

        return mappingMap.get(source, {})
