"""
Aritmética de polinômios binários sobre GF(2).

Um polinômio é representado como lista de bits com o coeficiente de maior grau
primeiro (MSB primeiro): [1, 0, 1, 1] == x^3 + x + 1. A soma é XOR e não há
transporte ("vai um"), portanto subtração e soma são a mesma operação.
"""

import logging
from itertools import zip_longest

from CamadaEnlace.resultados import MalformedInputError

logger = logging.getLogger(__name__)


def validate_bits(bits, name="bits"):
    """Converte uma sequência de 0/1 em lista de int, rejeitando qualquer outro valor (2, 0.5, "1" etc.)."""
    bits = list(bits)
    if any(b not in (0, 1) for b in bits):
        raise MalformedInputError(f"{name} deve conter apenas 0 e 1.")
    return [int(b) for b in bits]


def xor(a, b):
    """
    Soma XOR bit a bit entre dois vetores binários.

    Atenção: não é um XOR estrito de mesmo tamanho. Na região em que apenas um dos
    operandos tem bits, o bit do operando mais longo é copiado sem alteração, como
    se o mais curto fosse completado com zeros à direita.
    """
    return [x if y is None else y if x is None else x ^ y
            for x, y in zip_longest(a, b)]


def xor_divide(dividend, divisor):
    """
    Divisão polinomial binária (módulo 2). Retorna o resto.

    Mantém uma janela de no máximo len(divisor) bits: cada bit do dividendo entra
    na janela; quando ela fica cheia e começa com 1, aplica-se XOR com o divisor,
    o que zera o bit líder, que então é descartado.

    Ao final os zeros à esquerda do resto são removidos, preservando o último bit:
    uma divisão exata resulta exatamente em [0].
    """
    dividend = validate_bits(dividend, "dividendo")
    divisor = validate_bits(divisor, "divisor")
    if not divisor or divisor[0] != 1:
        raise MalformedInputError("O divisor deve ser não vazio e começar com 1.")

    length = len(divisor)
    current = []
    for bit in dividend:
        current.append(bit)
        if len(current) == length:
            if current[0] == 1:
                current = xor(current, divisor)
            current.pop(0)

    # Remove zeros à esquerda, mantendo ao menos um bit
    while len(current) > 1 and current[0] == 0:
        current.pop(0)

    remainder = current or [0]
    logger.debug(f"xor_divide: dividendo len={len(dividend)}, divisor len={length}, resto len={len(remainder)}")
    return remainder


def bits_to_int(bits):
    """Interpreta um vetor de bits (MSB primeiro) como inteiro sem sinal."""
    value = 0
    for bit in validate_bits(bits):
        value = (value << 1) | bit
    return value


def int_to_bits(value, width):
    """Representação MSB primeiro de `value` com exatamente `width` bits."""
    if value < 0 or value >= 1 << width:
        raise MalformedInputError(f"{value} não cabe em {width} bits.")
    return [(value >> i) & 1 for i in range(width - 1, -1, -1)]
