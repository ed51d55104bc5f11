# Simulador/transmissor.py

import logging

from Utilidades import utils
from CamadaEnlace.correcao_erros import ErrorCorrector
from Simulador.configuracao import build_codec, scheme_name

logger = logging.getLogger(__name__)


def run_transmitter(config, message=None, bits_raw_input=None):
    """
    Fluxo do transmissor: converte a mensagem em bits (camada de aplicação) e aplica o
    esquema de controle de erros configurado (camada de enlace).

    Args:
        config (dict): Configuração validada (ver Simulador.configuracao.load_config).
        message (str, opcional): Texto a transmitir.
        bits_raw_input (list[int], opcional): Bits crus; tem precedência sobre `message`.

    Returns:
        dict: 'bits' (dados originais), 'encoded' (quadro a transmitir) e
              'original_len_bits'.
    """
    if bits_raw_input is not None:
        bits = [int(b) for b in bits_raw_input]
        logger.info(f"1. (App) Mensagem original (binário puro): {utils.format_log(bits)}")
    elif message is not None:
        bits = utils.text_to_bits(message)
        logger.info(f"1. (App) Mensagem original em bits: {utils.format_log(bits)}")
    else:
        raise ValueError("Informe 'message' ou 'bits_raw_input'.")

    codec = build_codec(config)
    if isinstance(codec, ErrorCorrector):
        encoded = codec.add_parity_check(bits)
    else:
        encoded = codec.append_crc_hash(bits)
    logger.info(f"2. (Enlace) Aplicado {scheme_name(config)}. Quadro agora com {len(encoded)} bits.")

    return {
        "bits": bits,
        "encoded": encoded,
        "original_len_bits": len(bits),
    }
