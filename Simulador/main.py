# Simulador/main.py

import argparse
import logging
import random
import sys
from collections import Counter

import yaml

from Utilidades import utils
from CamadaEnlace.resultados import CodingError, ConfigurationError
from Simulador.configuracao import load_config, scheme_name
from Simulador.receptor import run_receiver
from Simulador.transmissor import run_transmitter

logger = logging.getLogger(__name__)

# Desfecho extra da varredura: decodificação aceita, porém com mensagem diferente da enviada
SILENT_ERROR = "SILENT_ERROR"

DEFAULT_SWEEP_RATES = [0.0, 0.002, 0.005, 0.01, 0.02, 0.05, 0.1]


class SimuladorEnlace:
    """
    Orquestra a transmissão de uma mensagem pelo transmissor, por um canal ruidoso
    simulado e pelo receptor, com o esquema de controle de erros configurado.
    """

    def __init__(self, config=None):
        self.config = config or load_config()
        self._rng = random.Random(self.config["seed"])
        logger.debug(f"SimuladorEnlace inicializado: {scheme_name(self.config)}, config={self.config}")

    def simular_meio_comunicacao(self, dados_bits, taxa_erros):
        """
        Simula o meio de comunicação: cada bit é invertido com probabilidade `taxa_erros`.

        Returns:
            tuple[list[int], list[int]]: bits recebidos e posições invertidas.

        Raises:
            ConfigurationError: taxa fora do intervalo [0, 1].
        """
        if not 0.0 <= taxa_erros <= 1.0:
            raise ConfigurationError("Taxa de erros deve estar entre 0.0 e 1.0.")

        recebidos = list(dados_bits)
        posicoes = []
        if taxa_erros > 0.0:
            for i in range(len(recebidos)):
                if self._rng.random() < taxa_erros:
                    recebidos[i] ^= 1
                    posicoes.append(i)

        if posicoes:
            logger.info(f"Erros introduzidos no meio nas posições: {posicoes}")
        else:
            logger.info("Nenhum erro introduzido no meio.")
        return recebidos, posicoes

    def simular(self, texto, taxa_erros=None):
        """
        Executa transmissor -> canal -> receptor para um texto.

        Returns:
            dict: 'sent', 'received', 'flipped', 'result', 'text'.
        """
        taxa = self.config["taxa_erros"] if taxa_erros is None else taxa_erros
        tx = run_transmitter(self.config, message=texto)
        received, flipped = self.simular_meio_comunicacao(tx["encoded"], taxa)
        rx = run_receiver(received, self.config, tx["original_len_bits"])
        return {
            "sent": tx["encoded"],
            "received": received,
            "flipped": flipped,
            "result": rx["result"],
            "text": rx["text"],
        }

    def avaliar_taxas(self, texto, taxas, repeticoes=100):
        """
        Repete a simulação para cada taxa de erro e conta os desfechos
        (nome do DecodeStatus, ou SILENT_ERROR quando o texto aceito difere do enviado).
        """
        resultados = {}
        for taxa in taxas:
            contagem = Counter()
            for _ in range(repeticoes):
                saida = self.simular(texto, taxa)
                if saida["result"].ok and saida["text"] != texto:
                    contagem[SILENT_ERROR] += 1
                else:
                    contagem[saida["result"].status.name] += 1
            resultados[taxa] = contagem
            logger.info(f"Taxa {taxa}: {dict(contagem)}")
        return resultados


def outcome_fractions(resultados):
    """Converte as contagens de avaliar_taxas em frações por desfecho, na ordem das taxas."""
    taxas = list(resultados)
    nomes = sorted({nome for contagem in resultados.values() for nome in contagem})
    fracoes = {}
    for nome in nomes:
        fracoes[nome] = [resultados[t].get(nome, 0) / max(sum(resultados[t].values()), 1) for t in taxas]
    return taxas, fracoes


def build_parser():
    parser = argparse.ArgumentParser(description="Simulador de detecção e correção de erros na camada de enlace.")
    parser.add_argument("--config", help="Arquivo YAML de configuração")
    parser.add_argument("--controle", type=int, choices=[0, 1, 2], help="0 = paridade par, 1 = paridade ímpar, 2 = CRC")
    parser.add_argument("--chunksize", type=int, help="Bits de dados por linha na paridade bidimensional")
    parser.add_argument("--taxa", type=float, help="Razão de bits com erro no canal")
    parser.add_argument("--seed", type=int, help="Semente do canal")
    parser.add_argument("--varredura", action="store_true", help="Avalia várias taxas de erro e plota os desfechos")
    parser.add_argument("--repeticoes", type=int, default=200, help="Transmissões por taxa na varredura")
    parser.add_argument("--plot", action="store_true", help="Plota os fluxos transmitido e recebido")
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')

    try:
        config = load_config(args.config, controle=args.controle, chunksize=args.chunksize,
                             taxa_erros=args.taxa, seed=args.seed)
        texto = sys.stdin.readline().rstrip("\n")
        simulador = SimuladorEnlace(config)

        if args.varredura:
            resultados = simulador.avaliar_taxas(texto, DEFAULT_SWEEP_RATES, args.repeticoes)
            taxas, fracoes = outcome_fractions(resultados)
            utils.plot_outcome_rates(taxas, fracoes, title=f"Desfechos - {scheme_name(config)}")
            return 0

        saida = simulador.simular(texto)
        if args.plot:
            utils.plot_bitstream(saida["sent"], saida["received"], title=f"Fluxo de bits - {scheme_name(config)}")
    except (CodingError, OSError, yaml.YAMLError) as e:
        logger.error(f"Erro crítico no simulador: {e}", exc_info=True)
        print(f"Erro: {e}")
        return 2

    print(f"Esquema: {scheme_name(config)}")
    print(f"Enviado:  {utils.format_log(saida['sent'], max_len=120)}")
    print(f"Recebido: {utils.format_log(saida['received'], max_len=120)} (bits invertidos: {saida['flipped']})")
    print(saida["result"].message)
    if not saida["result"].ok:
        print("ERRO: DADOS CORROMPIDOS.")
        return 1
    print(f"Mensagem recebida: {saida['text']}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
