import numpy as np
import matplotlib.pyplot as plt

# Convenção única de ordem de bits: MSB primeiro dentro de cada byte
# (0x41 -> [0, 1, 0, 0, 0, 0, 0, 1]).


def _as_bits(bits):
    bits = list(bits)
    if any(b not in (0, 1) for b in bits):
        raise ValueError("A sequência deve conter apenas bits 0 e 1.")
    return [int(b) for b in bits]


def byte_to_bits(byte):
    """
    Expande um byte (0..255) em seus 8 bits, do mais significativo para o menos significativo.

    Args:
        byte (int): Valor do byte.

    Returns:
        list[int]: 8 bits (0/1).
    """
    if not 0 <= byte <= 255:
        raise ValueError(f"Byte fora do intervalo 0..255: {byte}")
    return np.unpackbits(np.array([byte], dtype=np.uint8)).astype(int).tolist()


def bits_to_byte(bits):
    """
    Inverso de byte_to_bits: o último bit vale 1, o penúltimo 2, e assim por diante.

    Pré-condição: exatamente 8 bits. Outras larguras não têm interpretação definida
    e geram ValueError.
    """
    bits = _as_bits(bits)
    if len(bits) != 8:
        raise ValueError(f"bits_to_byte exige exatamente 8 bits, recebeu {len(bits)}")
    return sum(bit << i for i, bit in enumerate(reversed(bits)))


def bytes_to_bits(data):
    """
    Converte uma sequência de bytes em bits (8 por byte, MSB primeiro).

    Args:
        data (bytes): Bytes de entrada.

    Returns:
        list[int]: Bits concatenados.
    """
    return np.unpackbits(np.frombuffer(bytes(data), dtype=np.uint8)).astype(int).tolist()


def bits_to_bytes(bits):
    """
    Agrupa bits em bytes. Se o total não for múltiplo de 8, o último byte é completado
    com zeros à direita; quando já é múltiplo, nenhum byte extra é gerado.

    Args:
        bits (list[int]): Bits (0/1).

    Returns:
        bytes: Bytes reconstruídos.
    """
    # Valida antes do cast: -1 ou 256 não podem virar uint8
    array = np.asarray(_as_bits(bits), dtype=np.uint8)
    return np.packbits(array).tobytes()


def text_to_bits(text, encoding="utf-8"):
    """
    Converte texto em bits (camadas superiores preparando o dado para transmissão).
    """
    return bytes_to_bits(text.encode(encoding))


def bits_to_text(bits, encoding="utf-8"):
    """
    Reconstrói o texto a partir dos bits recebidos. Bytes inválidos viram o
    caractere de substituição em vez de interromper a recepção.
    """
    return bits_to_bytes(bits).decode(encoding, errors="replace")


def format_log(data, max_len=64):
    """
    Trunca sequências longas no meio para facilitar visualização em logs.
    Aceita string de bits ou lista de 0/1.
    """
    data_str = data if isinstance(data, str) else "".join(str(b) for b in data)
    if len(data_str) > max_len:
        return f"{data_str[:(max_len-3)//2]}...{data_str[-(max_len-3)//2:]}"
    return data_str


def plot_bitstream(sent, received=None, title="Fluxo de bits", show=True):
    """
    Plota o fluxo transmitido (e opcionalmente o recebido) em degraus, marcando as
    posições em que o canal inverteu bits.

    Args:
        sent (list[int]): Bits transmitidos.
        received (list[int], opcional): Bits recebidos, mesmo tamanho de `sent`.
        title (str, opcional): Título do gráfico.
        show (bool, opcional): Chama plt.show() ao final.

    Returns:
        matplotlib.figure.Figure
    """
    sent = np.asarray(sent, dtype=int)
    x = np.arange(len(sent))

    fig = plt.figure(figsize=(15, 4))
    plt.step(x, sent, where='post', label="Transmitido")
    if received is not None:
        received = np.asarray(received, dtype=int)
        if received.shape != sent.shape:
            raise ValueError("Fluxos transmitido e recebido devem ter o mesmo tamanho.")
        # Deslocado para não sobrepor o sinal transmitido
        plt.step(x, received - 1.5, where='post', label="Recebido")
        flipped = np.flatnonzero(sent != received)
        plt.scatter(flipped, received[flipped] - 1.5, c='red', marker='x', zorder=3, label="Bits invertidos")

    plt.title(title, fontsize=14)
    plt.xlabel("Posição do bit", fontsize=12)
    plt.yticks([])
    plt.grid(True)
    plt.legend(loc='upper right')
    plt.tight_layout()
    if show:
        plt.show()
    return fig


def plot_outcome_rates(rates, outcomes, title="Desfechos da decodificação por taxa de erro", show=True):
    """
    Plota a fração de cada desfecho da decodificação em função da taxa de erros do canal.

    Args:
        rates (list[float]): Taxas de erro simuladas (eixo X).
        outcomes (dict[str, list[float]]): Para cada desfecho, a fração observada em cada taxa.
        title (str, opcional): Título do gráfico.
        show (bool, opcional): Chama plt.show() ao final.

    Returns:
        matplotlib.figure.Figure
    """
    fig = plt.figure(figsize=(10, 5))
    for name, fractions in outcomes.items():
        if len(fractions) != len(rates):
            raise ValueError(f"Desfecho '{name}' tem {len(fractions)} pontos para {len(rates)} taxas.")
        plt.plot(rates, fractions, marker='o', label=name)

    plt.title(title, fontsize=14)
    plt.xlabel("Taxa de erros do canal", fontsize=12)
    plt.ylabel("Fração das transmissões", fontsize=12)
    plt.ylim(-0.05, 1.05)
    plt.grid(True)
    plt.legend()
    plt.tight_layout()
    if show:
        plt.show()
    return fig
