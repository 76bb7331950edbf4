import re

from netconf_transport.log import logger
from netconf_transport.error import IncompleteFrameError, FrameTooLargeError
from netconf_transport.constants import BUFFER_SIZE, MAX_FRAME_SIZE


def delimiter_matcher(delimiter):
    """Returns a match function for :meth:`Scanner.wait_for` that finds
    the end of the first occurrence of ``delimiter``"""
    if not delimiter:
        raise ValueError("Delimiter must not be empty")
    n = len(delimiter)

    def match(buf, searched):
        # `searched` trick: a delimiter split across reads starts at most
        # n - 1 bytes before the data that has not been searched yet
        index = buf.find(delimiter, max(0, searched - n + 1))
        if index == -1:
            return None
        return index + n

    return match


class Scanner:
    """Reads from a byte stream until a frame boundary shows up

    Received bytes are kept in a window that starts at ``buffer_size``
    and grows up to ``max_frame_size``. Each ``recv`` asks for
    ``buffer_size // 2`` bytes: the unmatched remainder carried over
    from the previous read and one new read then fit in the initial
    window, so a boundary straddling two reads is seen in one pass.

    Bytes following a boundary are not returned; they stay in the
    window and are scanned first on the next call.

    :param sock: Any object providing ``recv(n)``

    :param int buffer_size: Initial size of the receive window

    :param int max_frame_size: Octets that may be buffered without
                               finding a boundary before giving up

    """

    def __init__(self, sock, buffer_size=BUFFER_SIZE, max_frame_size=MAX_FRAME_SIZE):
        if buffer_size < 2:
            raise ValueError("buffer_size must be at least 2")
        if max_frame_size < buffer_size:
            raise ValueError("max_frame_size must not be smaller than buffer_size")
        self.sock = sock
        self.read_size = buffer_size // 2
        self.max_frame_size = max_frame_size
        self.buf = bytearray()

    def wait_for(self, match):
        """Blocks until ``match`` reports a boundary and returns the frame

        :param match: Callable ``match(buf, searched)`` returning the
                      offset just past the boundary in ``buf``, or
                      ``None``. ``searched`` is the number of leading
                      bytes it already saw without a hit.

        :rtype: :class:`bytearray` holding everything up to the boundary

        """
        searched = 0
        while True:
            end = match(self.buf, searched)
            if end is not None:
                frame = self.buf[:end]
                del self.buf[:end]
                return frame

            searched = len(self.buf)
            if searched > self.max_frame_size:
                raise FrameTooLargeError(searched, self.max_frame_size)

            r = self.sock.recv(self.read_size)
            if not r:
                logger.info(
                    "End of stream with %d octets of an unterminated frame", searched
                )
                raise IncompleteFrameError(searched)

            self.buf += r

    def wait_for_bytes(self, delimiter):
        """Returns the bytes preceding the next ``delimiter``; the
        delimiter itself is consumed"""
        frame = self.wait_for(delimiter_matcher(delimiter))
        return bytes(frame[: -len(delimiter)])

    def wait_for_string(self, s, encoding="utf-8"):
        return self.wait_for_bytes(s.encode(encoding)).decode(encoding)

    def wait_for_regexp(self, pattern):
        """Returns the frame up to the end of the first match of
        ``pattern`` along with the match's captured groups

        The pattern is applied to everything buffered so far, so it
        should only match once its boundary is complete.

        :rtype: tuple(:class:`bytes`, list)

        """
        if not hasattr(pattern, "search"):
            pattern = re.compile(pattern)
        groups = []

        def match(buf, _):
            m = pattern.search(buf)
            if m is None:
                return None
            groups.extend(bytes(g) if g is not None else None for g in m.groups())
            return m.end()

        frame = self.wait_for(match)
        return bytes(frame), groups
