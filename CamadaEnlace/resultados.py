import enum
from typing import List, NamedTuple, Optional


class CodingError(Exception):
    """Erro base da camada de codificação (detecção/correção de erros)."""
    pass


class MalformedInputError(CodingError, ValueError):
    """Entrada fora do formato esperado (bits inválidos, quadro incompleto etc.)."""
    pass


class ConfigurationError(CodingError, ValueError):
    """Parâmetros de configuração inválidos."""
    pass


class DecodeStatus(enum.Enum):
    """
    Desfecho de uma decodificação. O valor é o texto exibido nos relatórios.
    Apenas UNCHANGED e CORRECTED recuperam o conteúdo original.
    """
    UNCHANGED = "Nenhum erro detectado."
    CORRECTED = "Erro de paridade corrigido."
    MULTI_ERROR = "Mais de um erro de paridade detectado, impossível corrigir."
    CONTROL_BIT_ERROR = "Bit de controle (paridade) corrompido."
    CRC_MISMATCH = "Falha na verificação por CRC."

    @property
    def recovered(self):
        return self in (DecodeStatus.UNCHANGED, DecodeStatus.CORRECTED)


class DecodeResult(NamedTuple):
    """Resultado de `check_parity` / `recover_from_crc_hash`.

    bits:     conteúdo recuperado (None quando a decodificação falha)
    status:   DecodeStatus
    position: índice do bit corrigido, quando houve correção
    """
    bits: Optional[List[int]]
    status: DecodeStatus
    position: Optional[int] = None

    @property
    def ok(self):
        return self.bits is not None

    @property
    def message(self):
        if self.status is DecodeStatus.CORRECTED:
            return f"Erro de paridade corrigido na posição {self.position}."
        return self.status.value
