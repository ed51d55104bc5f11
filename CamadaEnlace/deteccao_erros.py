import logging
from dataclasses import dataclass
from typing import Tuple

from CamadaEnlace.polinomios import bits_to_int, int_to_bits, validate_bits, xor_divide
from CamadaEnlace.resultados import ConfigurationError, DecodeResult, DecodeStatus, MalformedInputError

logger = logging.getLogger(__name__)

# Polinômio CRC-32 (IEEE 802.3), utilizado em protocolos como Ethernet.
# Inclui o termo x^32 explicitamente: 33 coeficientes, grau 32.
CRC32_POLY = 0x104C11DB7
CRC32_GENERATOR: Tuple[int, ...] = tuple(int_to_bits(CRC32_POLY, 33))


@dataclass(frozen=True)
class CrcConfig:
    """
    generator: coeficientes do polinômio gerador, MSB primeiro.
    strip_generator_width: na recepção, remove len(generator) bits em vez de
        len(generator) - 1. Reproduz o comportamento legado, que descarta o
        último bit de dados em toda decodificação bem-sucedida.
    """
    generator: Tuple[int, ...] = CRC32_GENERATOR
    strip_generator_width: bool = False

    def __post_init__(self):
        generator = tuple(self.generator)
        if len(generator) < 2 or generator[0] != 1 or any(b not in (0, 1) for b in generator):
            raise ConfigurationError("O gerador deve ter grau >= 1, começar com 1 e conter apenas 0 e 1.")
        object.__setattr__(self, "generator", generator)

    @property
    def checksum_width(self):
        return len(self.generator) - 1


class ErrorDetector:
    """
    Implementa detecção de erros por CRC na Camada de Enlace.
    O transmissor anexa o resto da divisão polinomial (FCS) aos dados; o receptor
    divide o quadro inteiro pelo mesmo gerador e aceita apenas resto zero.
    """

    def __init__(self, config=None):
        self.config = config or CrcConfig()

    def generate_crc_hash(self, bits):
        """
        Gera o CRC dos dados: acrescenta len(gerador)-1 zeros, divide pelo gerador e
        completa o resto com zeros à esquerda até a largura do checksum.

        Divisão pura: valor inicial 0, sem reflexão de bits e sem XOR final.
        """
        width = self.config.checksum_width
        padded = validate_bits(bits) + [0] * width
        remainder = xor_divide(padded, self.config.generator)
        return [0] * (width - len(remainder)) + remainder

    def append_crc_hash(self, bits):
        """Anexa o CRC ao final do fluxo de bits (lado do transmissor)."""
        bits = validate_bits(bits)
        crc = self.generate_crc_hash(bits)
        logger.debug(f"append_crc_hash: {len(bits)} bits de dados, CRC={bits_to_int(crc):#010x}")
        return bits + crc

    def recover_from_crc_hash(self, received):
        """
        Verifica um quadro (dados + CRC) e, se íntegro, devolve os dados sem o CRC.
        Resto diferente de zero resulta em DecodeStatus.CRC_MISMATCH.
        """
        received = validate_bits(received)
        width = self.config.checksum_width
        if len(received) < width:
            raise MalformedInputError(f"Quadro com {len(received)} bits é menor que o CRC ({width} bits).")

        remainder = xor_divide(received, self.config.generator)
        if remainder != [0]:
            logger.warning(f"recover_from_crc_hash: resto {bits_to_int(remainder):#x}, quadro descartado")
            return DecodeResult(None, DecodeStatus.CRC_MISMATCH)

        strip = len(self.config.generator) if self.config.strip_generator_width else width
        return DecodeResult(received[:max(len(received) - strip, 0)], DecodeStatus.UNCHANGED)

    def checksum_value(self, bits):
        """Valor inteiro do CRC dos dados, para exibição em relatórios."""
        return bits_to_int(self.generate_crc_hash(bits))
