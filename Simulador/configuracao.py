"""
Configuração do simulador: escolha do esquema de controle e parâmetros do canal.

Apenas um esquema fica ativo por execução:
    0 -> paridade bidimensional par
    1 -> paridade bidimensional ímpar
    2 -> CRC-32
"""

import logging

import yaml

from CamadaEnlace.correcao_erros import ErrorCorrector, ParityConfig
from CamadaEnlace.deteccao_erros import CrcConfig, ErrorDetector
from CamadaEnlace.resultados import ConfigurationError

logger = logging.getLogger(__name__)

CONTROLE_PARIDADE_PAR = 0
CONTROLE_PARIDADE_IMPAR = 1
CONTROLE_CRC = 2

SCHEME_NAMES = {
    CONTROLE_PARIDADE_PAR: "Paridade par",
    CONTROLE_PARIDADE_IMPAR: "Paridade ímpar",
    CONTROLE_CRC: "CRC-32",
}

DEFAULT_CONFIG = {
    "controle": CONTROLE_PARIDADE_IMPAR,
    "chunksize": 5,          # Bits de dados por linha na paridade bidimensional
    "taxa_erros": 0.0,       # Probabilidade de inversão de cada bit no canal
    "seed": None,            # Semente do canal, para simulações reprodutíveis
    "strip_generator_width": False,
}


def load_config(path=None, **overrides):
    """
    Monta a configuração a partir dos valores padrão, de um arquivo YAML opcional e
    de sobrescritas nomeadas, nesta ordem de precedência crescente.

    Raises:
        ConfigurationError: chave desconhecida ou valor inválido.
    """
    config = dict(DEFAULT_CONFIG)
    if path is not None:
        with open(path, encoding="utf-8") as f:
            loaded = yaml.safe_load(f) or {}
        if not isinstance(loaded, dict):
            raise ConfigurationError(f"{path}: esperado um mapeamento YAML, obtido {type(loaded).__name__}")
        config.update(loaded)
        logger.debug(f"Configuração carregada de {path}: {loaded}")
    config.update({k: v for k, v in overrides.items() if v is not None})
    validate_config(config)
    return config


def validate_config(config):
    unknown = set(config) - set(DEFAULT_CONFIG)
    if unknown:
        raise ConfigurationError(f"Chaves de configuração desconhecidas: {sorted(unknown)}")

    if config["controle"] not in SCHEME_NAMES:
        raise ConfigurationError(f"controle deve ser 0, 1 ou 2, recebido {config['controle']!r}")
    chunksize = config["chunksize"]
    if not isinstance(chunksize, int) or isinstance(chunksize, bool) or chunksize < 1:
        raise ConfigurationError(f"chunksize deve ser inteiro positivo, recebido {chunksize!r}")
    taxa = config["taxa_erros"]
    if isinstance(taxa, bool) or not isinstance(taxa, (int, float)) or not 0.0 <= taxa <= 1.0:
        raise ConfigurationError(f"taxa_erros deve estar entre 0.0 e 1.0, recebido {taxa!r}")
    if config["seed"] is not None and not isinstance(config["seed"], int):
        raise ConfigurationError(f"seed deve ser inteiro ou nulo, recebido {config['seed']!r}")
    if not isinstance(config["strip_generator_width"], bool):
        raise ConfigurationError("strip_generator_width deve ser booleano")


def scheme_name(config):
    return SCHEME_NAMES[config["controle"]]


def build_codec(config):
    """Instancia o único codificador ativo para a configuração."""
    if config["controle"] == CONTROLE_CRC:
        return ErrorDetector(CrcConfig(strip_generator_width=config["strip_generator_width"]))
    return ErrorCorrector(ParityConfig(chunksize=config["chunksize"], parity=config["controle"]))
