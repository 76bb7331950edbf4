from enum import Enum

from netconf_transport.constants import DELIMITER_10, DELIMITER_11


class ProtocolVersion(Enum):
    """NETCONF message framing mode"""

    V1_0 = "1.0"
    V1_1 = "1.1"

    @classmethod
    def parse(cls, value):
        """Accepts a member, ``"1.0"``/``"1.1"`` or ``"v1.0"``/``"v1.1"``"""
        if isinstance(value, cls):
            return value
        text = str(value)
        if text.startswith("v"):
            text = text[1:]
        try:
            return cls(text)
        except ValueError:
            raise ValueError(
                "Unsupported message framing mode {}".format(value)
            ) from None


def frame_message_10(msg):
    return msg + DELIMITER_10


def frame_message_11(msg):
    header = "\n#{}\n".format(len(msg)).encode("ascii")
    return header + msg + DELIMITER_11


def encode_frame(version, msg):
    """Wraps ``msg`` in the framing of the given protocol version

    Version 1.1 messages are always sent as a single chunk.

    :param version: A :class:`ProtocolVersion`
    :param bytes msg: The payload; lengths are counted in octets

    :rtype: bytes
    """
    if not isinstance(msg, (bytes, bytearray, memoryview)):
        raise TypeError(
            "NETCONF payloads must be bytes, not {}".format(type(msg).__name__)
        )
    msg = bytes(msg)
    if version is ProtocolVersion.V1_1:
        return frame_message_11(msg)
    return frame_message_10(msg)
