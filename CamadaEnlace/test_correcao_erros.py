# CamadaEnlace/test_correcao_erros.py

import unittest

import numpy as np

from CamadaEnlace.correcao_erros import (
    ErrorCorrector,
    ParityConfig,
    classify_syndrome,
    horizontal_syndrome,
    vertical_syndrome,
)
from CamadaEnlace.resultados import ConfigurationError, DecodeStatus, MalformedInputError
from Utilidades.utils import bytes_to_bits

AB_BITS = [0, 1, 0, 0, 0, 0, 0, 1, 0, 1, 0, 0, 0, 0, 1, 0]
# chunksize=5, paridade ímpar: 4 linhas de 5+1 bits, linha de paridade das colunas e canto
AB_ENCODED = [int(c) for c in "010000" "001011" "000010" "000001" "10011" "0"]


def flip(bits, *positions):
    bits = list(bits)
    for p in positions:
        bits[p] ^= 1
    return bits


class TestAddParityCheck(unittest.TestCase):
    def setUp(self):
        self.corrector = ErrorCorrector(ParityConfig(chunksize=5, parity=1))

    def test_ab_layout(self):
        encoded = self.corrector.add_parity_check(AB_BITS)
        self.assertEqual(len(encoded), 4 * 6 + 5 + 1)
        self.assertEqual(encoded, AB_ENCODED)

    def test_no_spurious_padding_row(self):
        encoded = self.corrector.add_parity_check([1] * 10)
        self.assertEqual(len(encoded), 2 * 6 + 6)

    def test_empty_input(self):
        encoded = self.corrector.add_parity_check([])
        self.assertEqual(encoded, [1, 1, 1, 1, 1, 0])

    def test_row_column_and_corner_invariants(self):
        for parity in (0, 1):
            corrector = ErrorCorrector(ParityConfig(chunksize=4, parity=parity))
            encoded = np.array(corrector.add_parity_check(bytes_to_bits(b"Abelhinha 123")))
            rows = encoded.reshape(-1, 5)
            np.testing.assert_array_equal(rows.sum(axis=1) % 2, parity)
            np.testing.assert_array_equal(rows[:, :4].sum(axis=0) % 2, parity)

    def test_accepts_numpy_input(self):
        encoded = self.corrector.add_parity_check(np.array(AB_BITS, dtype=np.uint8))
        self.assertEqual(encoded, AB_ENCODED)
        self.assertTrue(all(type(b) is int for b in encoded))

    def test_rejects_non_bits(self):
        with self.assertRaises(MalformedInputError):
            self.corrector.add_parity_check([0, 1, 2])

    def test_rejects_fractional_bits(self):
        with self.assertRaises(MalformedInputError):
            self.corrector.add_parity_check([0, 0.5, 1])
        with self.assertRaises(MalformedInputError):
            self.corrector.check_parity(AB_ENCODED[:-1] + [0.5])


class TestCheckParity(unittest.TestCase):
    def setUp(self):
        self.corrector = ErrorCorrector(ParityConfig(chunksize=5, parity=1))

    def test_ab_decodes_without_errors(self):
        result = self.corrector.check_parity(AB_ENCODED, length=16)
        self.assertIs(result.status, DecodeStatus.UNCHANGED)
        self.assertEqual(result.bits, AB_BITS)
        self.assertIsNone(result.position)

    def test_without_length_keeps_zero_padding(self):
        result = self.corrector.check_parity(AB_ENCODED)
        self.assertEqual(result.bits, AB_BITS + [0, 0, 0, 0])

    def test_round_trip_configurations(self):
        data = bytes_to_bits(b"Abelhinha 123")
        for chunksize in (1, 3, 5, 8, 13):
            for parity in (0, 1):
                corrector = ErrorCorrector(ParityConfig(chunksize=chunksize, parity=parity))
                encoded = corrector.add_parity_check(data)
                result = corrector.check_parity(encoded, length=len(data))
                self.assertEqual(result.bits, data, msg=f"chunksize={chunksize}, parity={parity}")

    def test_empty_round_trip(self):
        result = self.corrector.check_parity(self.corrector.add_parity_check([]), length=0)
        self.assertIs(result.status, DecodeStatus.UNCHANGED)
        self.assertEqual(result.bits, [])

    def test_every_single_flip(self):
        width = 6
        data_end = 4 * width
        for i in range(len(AB_ENCODED)):
            result = self.corrector.check_parity(flip(AB_ENCODED, i), length=16)
            if i < data_end and i % width != width - 1:
                self.assertIs(result.status, DecodeStatus.CORRECTED, msg=f"posição {i}")
                self.assertEqual(result.position, 5 * (i // width) + i % width)
                self.assertEqual(result.bits, AB_BITS)
            else:
                self.assertIs(result.status, DecodeStatus.CONTROL_BIT_ERROR, msg=f"posição {i}")
                self.assertIsNone(result.bits)

    def test_two_flips_different_rows_and_columns(self):
        result = self.corrector.check_parity(flip(AB_ENCODED, 0, 7))
        self.assertIs(result.status, DecodeStatus.MULTI_ERROR)
        self.assertFalse(result.ok)

    def test_two_flips_same_row(self):
        result = self.corrector.check_parity(flip(AB_ENCODED, 0, 1))
        self.assertIs(result.status, DecodeStatus.CONTROL_BIT_ERROR)

    def test_two_flips_same_column(self):
        result = self.corrector.check_parity(flip(AB_ENCODED, 2, 8))
        self.assertIs(result.status, DecodeStatus.CONTROL_BIT_ERROR)

    def test_malformed_length(self):
        with self.assertRaises(MalformedInputError):
            self.corrector.check_parity(AB_ENCODED[:-1])
        with self.assertRaises(MalformedInputError):
            self.corrector.check_parity([])

    def test_length_larger_than_data(self):
        with self.assertRaises(MalformedInputError):
            self.corrector.check_parity(AB_ENCODED, length=21)

    def test_message_reports_position(self):
        result = self.corrector.check_parity(flip(AB_ENCODED, 7), length=16)
        self.assertEqual(result.message, "Erro de paridade corrigido na posição 6.")


class TestSyndrome(unittest.TestCase):
    def test_clean_stream(self):
        self.assertEqual(horizontal_syndrome(AB_ENCODED, 5, 1), [])
        self.assertEqual(vertical_syndrome(AB_ENCODED, 5, 1), [])

    def test_single_data_flip_located(self):
        corrupted = flip(AB_ENCODED, 2 * 6 + 3)
        self.assertEqual(horizontal_syndrome(corrupted, 5, 1), [2])
        self.assertEqual(vertical_syndrome(corrupted, 5, 1), [3])

    def test_wrong_parity_flags_everything(self):
        self.assertEqual(horizontal_syndrome(AB_ENCODED, 5, 0), [0, 1, 2, 3, 4])
        self.assertEqual(vertical_syndrome(AB_ENCODED, 5, 0), [0, 1, 2, 3, 4])

    def test_decision_table(self):
        self.assertEqual(classify_syndrome([], [], 5, 5), (DecodeStatus.UNCHANGED, None))
        self.assertEqual(classify_syndrome([2], [3], 5, 5), (DecodeStatus.CORRECTED, 13))
        self.assertEqual(classify_syndrome([2], [], 5, 5), (DecodeStatus.CONTROL_BIT_ERROR, None))
        self.assertEqual(classify_syndrome([], [3], 5, 5), (DecodeStatus.CONTROL_BIT_ERROR, None))
        self.assertEqual(classify_syndrome([4], [3], 5, 5), (DecodeStatus.CONTROL_BIT_ERROR, None))
        self.assertEqual(classify_syndrome([1, 2], [3], 5, 5), (DecodeStatus.MULTI_ERROR, None))
        self.assertEqual(classify_syndrome([], [0, 1], 5, 5), (DecodeStatus.CONTROL_BIT_ERROR, None))


class TestParityConfig(unittest.TestCase):
    def test_defaults(self):
        config = ParityConfig()
        self.assertEqual((config.chunksize, config.parity), (5, 1))

    def test_invalid_values(self):
        for kwargs in ({"chunksize": 0}, {"chunksize": 2.5}, {"chunksize": True}, {"parity": 2}, {"parity": -1}):
            with self.assertRaises(ConfigurationError):
                ParityConfig(**kwargs)


if __name__ == '__main__':
    unittest.main()
