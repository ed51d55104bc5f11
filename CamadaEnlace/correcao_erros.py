import logging
from dataclasses import dataclass

import numpy as np

from CamadaEnlace.resultados import ConfigurationError, DecodeResult, DecodeStatus, MalformedInputError
from CamadaEnlace.polinomios import validate_bits

logger = logging.getLogger(__name__)

PARIDADE_PAR = 0
PARIDADE_IMPAR = 1


@dataclass(frozen=True)
class ParityConfig:
    """chunksize: bits de dados por linha; parity: 0 = par, 1 = ímpar."""
    chunksize: int = 5
    parity: int = PARIDADE_IMPAR

    def __post_init__(self):
        if not isinstance(self.chunksize, int) or isinstance(self.chunksize, bool) or self.chunksize < 1:
            raise ConfigurationError(f"chunksize deve ser inteiro positivo, recebido {self.chunksize!r}")
        if self.parity not in (PARIDADE_PAR, PARIDADE_IMPAR):
            raise ConfigurationError(f"parity deve ser 0 (par) ou 1 (ímpar), recebido {self.parity!r}")


def _as_bit_array(bits):
    return np.asarray(validate_bits(bits, "O fluxo"), dtype=np.int64)


def horizontal_syndrome(received, chunksize, parity):
    """Índices das linhas (chunksize+1 bits, incluindo a linha final) cuja soma não bate com a paridade."""
    rows = np.asarray(received).reshape(-1, chunksize + 1)
    return np.flatnonzero(rows.sum(axis=1) % 2 != parity).tolist()


def vertical_syndrome(received, chunksize, parity):
    """Colunas 0..chunksize-1 cuja soma (passo chunksize+1 sobre todo o fluxo) não bate com a paridade."""
    received = np.asarray(received)
    return [offset for offset in range(chunksize)
            if received[offset::chunksize + 1].sum() % 2 != parity]


def classify_syndrome(rows, columns, chunksize, row_count):
    """
    Tabela de decisão da síndrome bidimensional.

    rows/columns: índices com paridade incorreta; row_count: total de linhas
    recebidas, incluindo a linha de paridade das colunas.
    Retorna (DecodeStatus, posição do bit a inverter ou None).
    """
    if not rows and not columns:
        return DecodeStatus.UNCHANGED, None
    if not rows or not columns:
        # Síndrome em apenas um eixo: tratada como bit de controle incorreto
        return DecodeStatus.CONTROL_BIT_ERROR, None
    if len(rows) > 1 or len(columns) > 1:
        return DecodeStatus.MULTI_ERROR, None

    y, x = rows[0], columns[0]
    if y == row_count - 1:
        # Linha e coluna apontam para a linha de paridade das colunas
        return DecodeStatus.CONTROL_BIT_ERROR, None
    return DecodeStatus.CORRECTED, chunksize * y + x


class ErrorCorrector:
    """
    Paridade bidimensional (linhas x colunas) para correção de erro de 1 bit.

    Os dados são dispostos em linhas de `chunksize` bits, cada uma seguida do seu bit
    de paridade. Ao final vem uma linha com a paridade de cada coluna e um bit de canto
    com a paridade dessa última linha:

        [linha0 | p0] [linha1 | p1] ... [paridade das colunas] [canto]
    """

    def __init__(self, config=None):
        self.config = config or ParityConfig()

    def add_parity_check(self, bits):
        chunksize, parity = self.config.chunksize, self.config.parity
        data = _as_bit_array(bits)

        pad = (-len(data)) % chunksize  # Completa a última linha sem gerar linha extra
        matrix = np.concatenate([data, np.zeros(pad, dtype=np.int64)]).reshape(-1, chunksize)

        row_bits = (matrix.sum(axis=1) + parity) % 2
        last_line = (matrix.sum(axis=0) + parity) % 2
        corner = (last_line.sum() + parity) % 2

        encoded = np.concatenate([np.column_stack([matrix, row_bits]).ravel(), last_line, [corner]])
        logger.debug(f"add_parity_check: {len(data)} bits, {matrix.shape[0]} linhas, padding={pad}, saída len={len(encoded)}")
        return encoded.astype(int).tolist()

    def check_parity(self, received, length=None):
        """
        Verifica o fluxo recebido, corrige um erro de bit único quando localizável e
        devolve o conteúdo original.

        Sem `length`, o resultado inclui os zeros de preenchimento da última linha;
        com `length` (tamanho original em bits) o preenchimento é descartado.
        """
        chunksize, parity = self.config.chunksize, self.config.parity
        width = chunksize + 1
        received = _as_bit_array(received)
        if len(received) == 0 or len(received) % width != 0:
            raise MalformedInputError(
                f"Quadro de {len(received)} bits não é múltiplo não nulo de {width} (chunksize + 1).")

        row_count = len(received) // width
        if length is not None and not 0 <= length <= chunksize * (row_count - 1):
            raise MalformedInputError(f"length={length} excede os {chunksize * (row_count - 1)} bits de dados do quadro.")

        rows = horizontal_syndrome(received, chunksize, parity)
        columns = vertical_syndrome(received, chunksize, parity)
        logger.debug(f"check_parity: síndrome horizontal={rows}, vertical={columns}")

        status, position = classify_syndrome(rows, columns, chunksize, row_count)
        if not status.recovered:
            logger.warning(f"check_parity: {status.value} (linhas={rows}, colunas={columns})")
            return DecodeResult(None, status)

        # Descarta a coluna de paridade das linhas e a linha final
        data = received.reshape(-1, width)[:-1, :chunksize].ravel()
        if status is DecodeStatus.CORRECTED:
            logger.info(f"Corrigindo erro de paridade na linha {rows[0]}, coluna {columns[0]}")
            data[position] ^= 1

        bits = data.astype(int).tolist()
        if length is not None:
            bits = bits[:length]
        return DecodeResult(bits, status, position)
