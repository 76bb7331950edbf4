import re

from netconf_transport.log import logger
from netconf_transport.error import ChunkHeaderParseError, MalformedChunkError
from netconf_transport.constants import CHUNK_MARKER, CHUNK_SIZE_MAX, DELIMITER_11_LEN

CHUNK_LENGTH_R = re.compile(b"[0-9]+")


def reassemble_chunks(buf, end=None):
    """Decodes a chunked (version 1.1) frame in place

    ``buf[:end]`` must end just past the ``\\n##\\n`` end-of-chunks
    marker. The chunk payloads are copied to the front of ``buf``, one
    after another.

    :param bytearray buf: The captured frame

    :param int end: Offset just past the end-of-chunks marker; defaults
                    to ``len(buf)``

    :return: Length of the reassembled payload at ``buf[:length]``

    """
    if end is None:
        end = len(buf)
    data_end = end - DELIMITER_11_LEN
    length = 0
    i = 0

    while i < end - 1:
        i = buf.find(CHUNK_MARKER, i, end)
        if i == -1:
            break

        j = buf.find(b"\n", i + 2, end)
        if j == -1:
            j = end
        header = bytes(buf[i + 2 : j])
        if header == b"#":
            return length

        if not CHUNK_LENGTH_R.fullmatch(header):
            raise ChunkHeaderParseError(i, header, length)
        chunk_length = int(header)
        if chunk_length > CHUNK_SIZE_MAX:
            raise ChunkHeaderParseError(i, header, length)

        start = j + 1
        if start + chunk_length > data_end:
            raise MalformedChunkError(
                i, chunk_length, max(0, data_end - start), length
            )

        buf[length : length + chunk_length] = buf[start : start + chunk_length]
        length += chunk_length
        i = start + chunk_length

    logger.debug("Frame ended without an end-of-chunks marker after %d octets", length)
    return length


def decode_chunks(frame):
    """Returns the payload of a complete chunked frame as :class:`bytes`"""
    buf = bytearray(frame)
    length = reassemble_chunks(buf)
    return bytes(buf[:length])
