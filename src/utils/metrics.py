from typing import Dict, Any
from collections import defaultdict
from datetime import datetime, timezone
import logging


class MetricsCollector:

    def __init__(self):
        self.logger = logging.getLogger(self.__class__.__name__)
        self.reset()

    def reset(self) -> None:
        self.startTime = datetime.now(timezone.utc)

        self.txs_fetched = 0
        self.txs_normalized = 0
        self.txs_skipped = 0

        self.txs_decoded = 0
        self.msgs_by_type = defaultdict(int)

        self.fees_classified = defaultdict(int)

        self.errors = defaultdict(int)

        self.processing_times = []

    def recordTxFetched(self) -> None:
        self.txs_fetched += 1

    def recordTxNormalized(self) -> None:
        self.txs_normalized += 1

    def recordTxSkipped(self) -> None:
        self.txs_skipped += 1

    def recordTxDecoded(self, msgTypes) -> None:
        self.txs_decoded += 1
        for msgType in msgTypes:
            self.msgs_by_type[msgType] += 1

    def recordFeeClassified(self, kind: str) -> None:
        self.fees_classified[kind] += 1

    def recordError(self, component: str) -> None:
        self.errors[component] += 1

    def recordProcessingTime(self, duration_seconds: float) -> None:
        self.processing_times.append(duration_seconds)

    def getMetrics(self) -> Dict[str, Any]:
        runtimeSeconds = (datetime.now(timezone.utc) - self.startTime).total_seconds()

        metrics = {
            'runtimeSeconds': runtimeSeconds,
            'transactions': {
                'fetched': self.txs_fetched,
                'normalized': self.txs_normalized,
                'skipped': self.txs_skipped,
                'decoded': self.txs_decoded
            },
            'messages': dict(self.msgs_by_type),
            'fees': dict(self.fees_classified),
            'errors': dict(self.errors),
            'performance': {
                'avg_processing_time_ms': sum(self.processing_times) / len(self.processing_times) * 1000 if self.processing_times else 0,
                'max_processing_time_ms': max(self.processing_times) * 1000 if self.processing_times else 0
            }
        }

        return metrics

    def logMetrics(self) -> None:
        metrics = self.getMetrics()

        self.logger.info("=== Normalization Metrics ===")
        self.logger.info(f"Runtime: {metrics['runtimeSeconds']:.2f} seconds")
        self.logger.info(f"Transactions fetched: {metrics['transactions']['fetched']}")
        self.logger.info(f"Transactions normalized: {metrics['transactions']['normalized']}")
        self.logger.info(f"Transactions skipped: {metrics['transactions']['skipped']}")

        if metrics['transactions']['decoded']:
            self.logger.info(f"Transactions decoded: {metrics['transactions']['decoded']} ({metrics['messages']})")

        if metrics['fees']:
            self.logger.info(f"Fee entries classified: {metrics['fees']}")

        if metrics['errors']:
            self.logger.warning(f"Errors: {metrics['errors']}")
