from typing import Callable, List

Framer = Callable[[bytes], List[bytes]]


def default_framer(message: bytes) -> List[bytes]:
    """No framing; typical for UDP and the local daemon socket"""
    return [message]


def rfc5425_message_length_framer(message: bytes) -> List[bytes]:
    """
    Octet-counting framing (RFC 5425 / RFC 6587): '<length> <message>'.
    The length prefix and the message are returned as separate chunks.
    """
    return [f"{len(message)} ".encode('ascii'), message]
