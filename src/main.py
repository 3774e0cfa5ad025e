"""
Binance Chain Transaction Normalizer

Main orchestration module: fetches Binance Chain transaction records, fee
schedules and raw transactions and turns them into the chain-agnostic model.
"""

import sys
import json
import logging
from pathlib import Path
from datetime import datetime
from typing import Any, Dict, List, Optional
import time
import click

# Add src to path
sys.path.insert(0, str(Path(__file__).parent))

from utils.config_loader import ConfigLoader
from utils.logger import setupLogging
from utils.metrics import MetricsCollector
from ingestion.base import IngestionError
from ingestion.binance_dex import BinanceDexIngestion
from normalization.normalizer import TxNormalizer
from normalization.fees import classifyFees
from codec.decoder import decodeTxMessages


class NormalizationPipeline:
    """
    Main pipeline orchestrator.

    Coordinates:
    1. Transaction ingestion from the DEX API (or a JSON file)
    2. Record normalization
    3. Fee schedule classification
    4. Raw transaction decoding
    """

    def __init__(self, config_path: Optional[str] = None):
        """
        Initialize the pipeline.

        Args:
            config_path: Path to configuration file (defaults when None)

        Raises:
            FileNotFoundError: If config file not found
            ValueError: If config validation fails
        """
        self.config_loader = ConfigLoader(config_path)
        self.config = self.config_loader.load()

        if not self.config_loader.validate():
            raise ValueError(f"Invalid configuration: {config_path}")

        setupLogging(self.config)
        self.logger = logging.getLogger(self.__class__.__name__)

        self.metrics = MetricsCollector()
        self.normalizer = TxNormalizer(self.config.get('normalization', {}), metrics=self.metrics)
        self._connector: Optional[BinanceDexIngestion] = None

        self.logger.info("Pipeline initialized successfully")

    @property
    def connector(self) -> BinanceDexIngestion:
        if self._connector is None:
            connector = BinanceDexIngestion(self.config.get('ingestion', {}).get('binance', {}))
            if not connector.validateConfig():
                raise ValueError("Invalid ingestion.binance configuration")
            self._connector = connector
        return self._connector

    def normalizeRecords(self, records: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        start = time.time()
        txs = self.normalizer.normalizeMany(records)
        self.metrics.recordProcessingTime(time.time() - start)
        return [tx.toDict() for tx in txs]

    def run(
        self,
        address: str,
        startTime: Optional[datetime] = None,
        endTime: Optional[datetime] = None,
        txType: Optional[str] = None
    ) -> List[Dict[str, Any]]:
        """
        Fetch and normalize all transactions of an address.

        Args:
            address: Binance Chain address (bnb1... / tbnb1...)
            startTime: Start of the query window
            endTime: End of the query window
            txType: Optional chain tx type filter, e.g. TRANSFER

        Returns:
            Normalized transactions as dictionaries
        """
        self.logger.info(f"Fetching transactions for {address}")

        records = []
        for record in self.connector.fetchTransactions(address, startTime, endTime, {'txType': txType}):
            self.metrics.recordTxFetched()
            records.append(record)

        try:
            return self.normalizeRecords(records)
        finally:
            self.metrics.logMetrics()

    def normalizeFile(self, path: str) -> List[Dict[str, Any]]:
        with open(path, 'r') as f:
            payload = json.load(f)

        # Accept both a bare list and a raw /api/v1/transactions response
        records = payload.get('tx', []) if isinstance(payload, dict) else payload
        for _ in records:
            self.metrics.recordTxFetched()

        try:
            return self.normalizeRecords(records)
        finally:
            self.metrics.logMetrics()

    def classifyFeeSchedule(self, fees: Optional[List[Dict[str, Any]]] = None) -> List[Dict[str, Any]]:
        if fees is None:
            fees = self.connector.fetchFees()

        schedules = classifyFees(fees)
        for schedule in schedules:
            self.metrics.recordFeeClassified(schedule.kind.value)

        skipped = len(fees) - len(schedules)
        if skipped:
            self.logger.warning(f"{skipped} fee entr{'y' if skipped == 1 else 'ies'} could not be classified")

        return [schedule.toDict() for schedule in schedules]

    def decodeTx(self, txHex: str) -> List[Dict[str, Any]]:
        msgs = decodeTxMessages(bytes.fromhex(txHex))
        self.metrics.recordTxDecoded([msg.__class__.__name__ for msg in msgs])
        return [_msgToDict(msg) for msg in msgs]


def _msgToDict(msg: Any) -> Dict[str, Any]:
    data = {'type': msg.__class__.__name__}
    for _, name, _ in msg.FIELDS:
        data[name.rstrip('_')] = _jsonValue(getattr(msg, name))
    return data


def _jsonValue(value: Any) -> Any:
    if isinstance(value, bytes):
        return value.hex()
    if isinstance(value, list):
        return [_jsonValue(item) for item in value]
    if hasattr(value, 'FIELDS'):
        return {name: _jsonValue(getattr(value, name)) for _, name, _ in value.FIELDS}
    return value


def _emit(data: Any, output: Optional[str]) -> None:
    text = json.dumps(data, indent=2)
    if output:
        Path(output).write_text(text + '\n')
    else:
        click.echo(text)


@click.group()
@click.option(
    '--config',
    default=None,
    help='Path to configuration file'
)
@click.pass_context
def cli(ctx, config):
    """Binance Chain Transaction Normalizer"""
    try:
        ctx.obj = NormalizationPipeline(config)
    except (FileNotFoundError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


@cli.command()
@click.option('--address', help='Fetch transactions of this address from the DEX API')
@click.option('--input', 'input_path', type=click.Path(exists=True), help='JSON file of transaction records')
@click.option('--tx-type', default=None, help='Chain tx type filter, e.g. TRANSFER')
@click.option('--output', default=None, help='Write JSON here instead of stdout')
@click.pass_obj
def normalize(pipeline, address, input_path, tx_type, output):
    """Normalize transaction records."""
    if not address and not input_path:
        raise click.UsageError('Pass --address or --input')

    try:
        if input_path:
            txs = pipeline.normalizeFile(input_path)
        else:
            txs = pipeline.run(address, txType=tx_type)
    except IngestionError as e:
        raise click.ClickException(str(e))

    _emit(txs, output)


@cli.command()
@click.argument('tx_hex')
@click.option('--output', default=None, help='Write JSON here instead of stdout')
@click.pass_obj
def decode(pipeline, tx_hex, output):
    """Decode the messages of a hex-encoded transaction."""
    try:
        msgs = pipeline.decodeTx(tx_hex)
    except ValueError as e:
        raise click.ClickException(f"Cannot decode transaction: {e}")

    _emit(msgs, output)


@cli.command()
@click.option('--input', 'input_path', type=click.Path(exists=True), help='JSON file with a /api/v1/fees response')
@click.option('--output', default=None, help='Write JSON here instead of stdout')
@click.pass_obj
def fees(pipeline, input_path, output):
    """Classify the chain fee schedule."""
    feeList = None
    if input_path:
        with open(input_path, 'r') as f:
            feeList = json.load(f)

    try:
        schedules = pipeline.classifyFeeSchedule(feeList)
    except IngestionError as e:
        raise click.ClickException(str(e))

    _emit(schedules, output)


if __name__ == '__main__':
    cli()
