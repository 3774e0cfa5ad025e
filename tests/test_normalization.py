"""
Unit Tests for Binance Chain payload normalization
"""

import unittest
from datetime import datetime, timezone

from normalization.schema import Asset, BinanceTxType, FeeKind, TxType
from normalization.assets import assetFromString, assetToBase
from normalization.events import extractTransferHash, extractMemoTxHash
from normalization.fees import isFee, isFreezeFee, isTransferFee, isDexFees, classifyFee, classifyFees, getFreezeFee
from normalization.field_mapper import FieldMapper
from normalization.normalizer import TxNormalizer, mapTxType, normalizeTx, parseTimestamp
from utils.metrics import MetricsCollector


class TestEventExtraction(unittest.TestCase):

    def testTransferHash(self):
        event = {'stream': 'transfers', 'data': {'e': 'outboundTransferInfo', 'H': 'ABC123', 'M': ''}}
        self.assertEqual(extractTransferHash(event), 'ABC123')

    def testTransferHashMissing(self):
        self.assertIsNone(extractTransferHash(None))
        self.assertIsNone(extractTransferHash({}))
        self.assertIsNone(extractTransferHash({'data': {}}))
        self.assertIsNone(extractTransferHash({'data': None}))

    def testMemoTxHash(self):
        event = {'data': {'M': 'abc:deadbeef:xyz'}}
        self.assertEqual(extractMemoTxHash(event), 'deadbeef')

    def testMemoOutboundFormat(self):
        event = {'data': {'H': 'X', 'M': 'OUT:9F0B2A'}}
        self.assertEqual(extractMemoTxHash(event), '9F0B2A')

    def testMemoWithoutColon(self):
        self.assertIsNone(extractMemoTxHash({'data': {'M': 'abc'}}))

    def testMemoMissingData(self):
        self.assertIsNone(extractMemoTxHash(None))
        self.assertIsNone(extractMemoTxHash({}))
        self.assertIsNone(extractMemoTxHash({'data': {'H': 'X'}}))

    def testWsTransferMapping(self):
        mapper = FieldMapper()
        event = {'stream': 'transfers', 'data': {'e': 'outboundTransferInfo', 'E': 12893, 'H': 'ABC', 'M': 'OUT:DEF', 'f': 'bnb1from'}}

        mapped = mapper.mapFields(event, mapper.getMappingForSource('ws_transfer'))

        self.assertEqual(mapped['hash'], extractTransferHash(event))
        self.assertEqual(mapped['memo'], 'OUT:DEF')
        self.assertEqual(mapped['fromAddr'], 'bnb1from')
        self.assertNotIn('outputs', mapped)


class TestFeeClassification(unittest.TestCase):

    def testIsFee(self):
        self.assertTrue(isFee({'msg_type': 'send', 'fee': 1, 'fee_for': 2}))
        self.assertFalse(isFee({'msg_type': 'send'}))
        self.assertFalse(isFee({'msg_type': '', 'fee': 1, 'fee_for': 2}))
        self.assertTrue(isFee({'msg_type': 'send', 'fee': 0, 'fee_for': 0}))
        self.assertTrue(isFee({'msg_type': 'send', 'fee': None, 'fee_for': None}))
        self.assertFalse(isFee({'msg_type': 'send', 'fee': 1}))
        self.assertFalse(isFee(None))

    def testIsFreezeFee(self):
        self.assertTrue(isFreezeFee({'msg_type': 'tokensFreeze'}))
        self.assertTrue(isFreezeFee({'msg_type': 'tokensFreeze', 'fee': 1000000, 'fee_for': 1}))
        self.assertFalse(isFreezeFee({'msg_type': 'send', 'fee': 1, 'fee_for': 1}))

    def testFreezeFeeOverlapsFee(self):
        value = {'msg_type': 'tokensFreeze', 'fee': 1000000, 'fee_for': 1}
        self.assertTrue(isFee(value))
        self.assertTrue(isFreezeFee(value))

    def testIsTransferFee(self):
        value = {
            'fixed_fee_params': {'msg_type': 'x', 'fee': 1, 'fee_for': 2},
            'multi_transfer_fee': 0
        }
        self.assertTrue(isTransferFee(value))

    def testIsTransferFeeAcceptsNullMultiTransferFee(self):
        value = {
            'fixed_fee_params': {'msg_type': 'x', 'fee': 1, 'fee_for': 2},
            'multi_transfer_fee': None
        }
        self.assertTrue(isTransferFee(value))

    def testIsTransferFeeRequiresMultiTransferFee(self):
        value = {'fixed_fee_params': {'msg_type': 'x', 'fee': 1, 'fee_for': 2}}
        self.assertFalse(isTransferFee(value))

    def testIsTransferFeeRequiresValidFixedParams(self):
        value = {'fixed_fee_params': {'msg_type': 'x'}, 'multi_transfer_fee': 200000}
        self.assertFalse(isTransferFee(value))

    def testIsDexFees(self):
        self.assertFalse(isDexFees({'dex_fee_fields': []}))
        self.assertTrue(isDexFees({'dex_fee_fields': [{'fee_name': 'ExpireFee', 'fee_value': 10000}]}))
        self.assertFalse(isDexFees({'msg_type': 'send', 'fee': 1, 'fee_for': 1}))
        self.assertFalse(isDexFees({'dex_fee_fields': {'a': 1}}))
        self.assertFalse(isDexFees({'dex_fee_fields': 'ExpireFee'}))

    def testClassifyPriority(self):
        fee = classifyFee({'msg_type': 'send', 'fee': 1, 'fee_for': 1})
        self.assertEqual(fee.kind, FeeKind.FEE)

        transferFee = classifyFee({
            'fixed_fee_params': {'msg_type': 'send', 'fee': 37500, 'fee_for': 1},
            'multi_transfer_fee': 30000,
            'lower_limit_as_multi': 2
        })
        self.assertEqual(transferFee.kind, FeeKind.TRANSFER_FEE)
        self.assertEqual(transferFee.msgType, 'send')

        dexFees = classifyFee({'dex_fee_fields': [{'fee_name': 'ExpireFee', 'fee_value': 10000}]})
        self.assertEqual(dexFees.kind, FeeKind.DEX_FEES)
        self.assertIsNone(dexFees.msgType)

        self.assertIsNone(classifyFee({'unrelated': True}))

    def testClassifyFeesAndFreezeLookup(self):
        schedules = classifyFees([
            {'msg_type': 'submit_proposal', 'fee': 1000000000, 'fee_for': 1},
            {'msg_type': 'tokensFreeze', 'fee': 1000000, 'fee_for': 1},
            {'fixed_fee_params': {'msg_type': 'send', 'fee': 37500, 'fee_for': 1}, 'multi_transfer_fee': 30000},
            {'dex_fee_fields': []},
        ])

        self.assertEqual([s.kind for s in schedules], [FeeKind.FEE, FeeKind.FEE, FeeKind.TRANSFER_FEE])

        freezeFee = getFreezeFee(schedules)
        self.assertEqual(freezeFee.value['fee'], 1000000)


class TestTxTypeMapping(unittest.TestCase):

    def testKnownTypes(self):
        self.assertEqual(mapTxType('TRANSFER'), TxType.TRANSFER)
        self.assertEqual(mapTxType('DEPOSIT'), TxType.TRANSFER)
        self.assertEqual(mapTxType('FREEZE_TOKEN'), TxType.FREEZE)
        self.assertEqual(mapTxType('UN_FREEZE_TOKEN'), TxType.UNFREEZE)

    def testEnumInput(self):
        self.assertEqual(mapTxType(BinanceTxType.FREEZE_TOKEN), TxType.FREEZE)
        self.assertEqual(mapTxType(BinanceTxType.NEW_ORDER), TxType.UNKNOWN)

    def testUnknownTypes(self):
        self.assertEqual(mapTxType('NEW_ORDER'), TxType.UNKNOWN)
        self.assertEqual(mapTxType('SOMETHING_NEW'), TxType.UNKNOWN)
        self.assertEqual(mapTxType(None), TxType.UNKNOWN)


class TestAssets(unittest.TestCase):

    def testAssetFromString(self):
        asset = assetFromString('BNB.BUSD-BD1')
        self.assertEqual(asset, Asset(chain='BNB', symbol='BUSD-BD1', ticker='BUSD'))
        self.assertEqual(str(asset), 'BNB.BUSD-BD1')

    def testInvalidAssets(self):
        self.assertIsNone(assetFromString('BNB.'))
        self.assertIsNone(assetFromString('BNB'))
        self.assertIsNone(assetFromString('XYZ.BNB'))
        self.assertIsNone(assetFromString(''))

    def testAssetToBase(self):
        self.assertEqual(assetToBase(1.5, 8).amount, 150000000)
        self.assertEqual(assetToBase('0.00000001', 8).amount, 1)
        self.assertEqual(assetToBase('0.000000019', 8).amount, 1)
        with self.assertRaises(ValueError):
            assetToBase('abc', 8)


class TestTxNormalization(unittest.TestCase):

    def setUp(self):
        self.record = {
            'txAsset': 'BNB',
            'fromAddr': 'A',
            'toAddr': 'B',
            'value': 1.5,
            'timeStamp': 0,
            'txType': 'TRANSFER',
            'txHash': 'H'
        }

    def testNormalizeTx(self):
        tx = normalizeTx(self.record)

        self.assertIsNotNone(tx)
        self.assertEqual(str(tx.asset), 'BNB.BNB')
        self.assertEqual(len(tx.from_), 1)
        self.assertEqual(len(tx.to), 1)
        self.assertEqual(tx.from_[0].from_, 'A')
        self.assertEqual(tx.to[0].to, 'B')
        self.assertEqual(tx.from_[0].amount.amount, 150000000)
        self.assertEqual(tx.to[0].amount.amount, 150000000)
        self.assertEqual(tx.date, datetime(1970, 1, 1, tzinfo=timezone.utc))
        self.assertEqual(tx.type, TxType.TRANSFER)
        self.assertEqual(tx.hash, 'H')

    def testNormalizeTxUnknownAsset(self):
        self.record['txAsset'] = ''
        self.assertIsNone(normalizeTx(self.record))

        del self.record['txAsset']
        self.assertIsNone(normalizeTx(self.record))

    def testNormalizeTxToDict(self):
        self.record['txAsset'] = 'BUSD-BD1'
        self.record['value'] = '10.00000000'
        self.record['timeStamp'] = '2021-03-04T05:06:07.123Z'
        self.record['txType'] = 'FREEZE_TOKEN'

        data = normalizeTx(self.record).toDict()

        self.assertEqual(data['asset'], 'BNB.BUSD-BD1')
        self.assertEqual(data['from'], [{'from': 'A', 'amount': '1000000000'}])
        self.assertEqual(data['to'], [{'to': 'B', 'amount': '1000000000'}])
        self.assertEqual(data['type'], 'freeze')
        self.assertTrue(data['date'].startswith('2021-03-04T05:06:07.123'))

    def testParseTimestamp(self):
        self.assertEqual(parseTimestamp(1600000000000), datetime(2020, 9, 13, 12, 26, 40, tzinfo=timezone.utc))
        self.assertEqual(parseTimestamp('1600000000000'), datetime(2020, 9, 13, 12, 26, 40, tzinfo=timezone.utc))
        with self.assertRaises(ValueError):
            parseTimestamp('not a date')
        self.assertEqual(parseTimestamp('2021-03-04T05:06:07'), datetime(2021, 3, 4, 5, 6, 7, tzinfo=timezone.utc))
        self.assertEqual(parseTimestamp('2021-03-04T05:06:07Z'), datetime(2021, 3, 4, 5, 6, 7, tzinfo=timezone.utc))
        with self.assertRaises(ValueError):
            parseTimestamp(None)

    def testNormalizeTxUnparsableTimestamp(self):
        self.record['timeStamp'] = 'garbage'

        tx = normalizeTx(self.record)

        self.assertIsNotNone(tx)
        self.assertIsNone(tx.date)
        self.assertEqual(tx.hash, 'H')
        self.assertIsNone(tx.toDict()['date'])

        del self.record['timeStamp']
        self.assertIsNone(normalizeTx(self.record).date)

    def testNormalizeManyRecordsMetrics(self):
        metrics = MetricsCollector()
        normalizer = TxNormalizer({'chain': 'BNB', 'decimal': 8}, metrics=metrics)

        broken = dict(self.record, txHash='BROKEN', value='abc')
        unknown = dict(self.record, txHash='SKIP', txAsset='')

        txs = normalizer.normalizeMany([self.record, unknown, broken])

        self.assertEqual([tx.hash for tx in txs], ['H'])
        self.assertEqual(metrics.txs_normalized, 1)
        self.assertEqual(metrics.txs_skipped, 1)
        self.assertEqual(metrics.errors['normalization'], 1)


if __name__ == '__main__':
    unittest.main()
