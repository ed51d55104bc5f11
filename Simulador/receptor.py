# Simulador/receptor.py

import logging

from Utilidades import utils
from CamadaEnlace.correcao_erros import ErrorCorrector
from CamadaEnlace.polinomios import bits_to_int
from Simulador.configuracao import build_codec, scheme_name

logger = logging.getLogger(__name__)


def run_receiver(received, config, original_len_bits):
    """
    Fluxo do receptor: verifica o quadro com o esquema configurado, corrigindo o que for
    possível, e reconstrói a mensagem.

    Args:
        received (list[int]): Bits que chegaram do canal.
        config (dict): Mesma configuração usada no transmissor.
        original_len_bits (int): Tamanho original da mensagem, para descartar o
            preenchimento da paridade bidimensional.

    Returns:
        dict: 'result' (DecodeResult), 'bits' e 'text' (None quando a verificação falha).
    """
    codec = build_codec(config)
    logger.info(f"3. (Enlace) Verificando {len(received)} bits com {scheme_name(config)}")
    if isinstance(codec, ErrorCorrector):
        result = codec.check_parity(received, length=original_len_bits)
    else:
        width = codec.config.checksum_width
        if len(received) >= width:
            logger.info(f"3. (Enlace) CRC recebido: {bits_to_int(received[-width:]):#010x}, "
                        f"CRC calculado: {codec.checksum_value(received[:-width]):#010x}")
        result = codec.recover_from_crc_hash(received)

    if not result.ok:
        logger.warning(f"3. (Enlace) {result.message}")
        return {"result": result, "bits": None, "text": None}

    logger.info(f"3. (Enlace) {result.message}")
    text = utils.bits_to_text(result.bits)
    logger.info(f"4. (App) Mensagem recebida: {utils.format_log(text, max_len=120)}")
    return {"result": result, "bits": result.bits, "text": text}
