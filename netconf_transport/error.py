class NetconfTransportException(Exception):
    """Base class for all ``netconf_transport`` exceptions"""

    pass


class TransportClosedException(NetconfTransportException):
    """This exception is raised on any I/O attempted after the transport was closed"""

    pass


class NetconfProtocolError(NetconfTransportException):
    """Base class for framing errors

    After one of these is raised the position in the incoming stream
    can no longer be trusted and the connection should be closed.

    """

    pass


class ChunkHeaderParseError(NetconfProtocolError):
    """This exception is raised when a chunk header does not hold a valid length

    :ivar int offset: Offset of the ``\\n#`` marker within the frame
    :ivar bytes header: The text found between ``\\n#`` and the next newline
    :ivar int decoded: Number of payload bytes reassembled before the error

    """

    def __init__(self, offset, header, decoded=0):
        self.offset = offset
        self.header = header
        self.decoded = decoded
        super(ChunkHeaderParseError, self).__init__(
            "Invalid chunk length {!r} at offset {}".format(header, offset)
        )


class MalformedChunkError(NetconfProtocolError):
    """This exception is raised when a chunk declares more octets than the frame holds

    :ivar int offset: Offset of the ``\\n#`` marker within the frame
    :ivar int length: The declared chunk length
    :ivar int available: Octets actually present before the end-of-chunks marker
    :ivar int decoded: Number of payload bytes reassembled before the error

    """

    def __init__(self, offset, length, available, decoded=0):
        self.offset = offset
        self.length = length
        self.available = available
        self.decoded = decoded
        super(MalformedChunkError, self).__init__(
            "Chunk at offset {} declares {} octets but only {} are present".format(
                offset, length, available
            )
        )


class IncompleteFrameError(NetconfProtocolError):
    """This exception is raised when the peer closes the stream in the middle of a frame

    :ivar int buffered: Number of octets received for the unfinished frame

    """

    def __init__(self, buffered):
        self.buffered = buffered
        super(IncompleteFrameError, self).__init__(
            "End of stream with {} octets of an unterminated frame".format(buffered)
        )


class FrameTooLargeError(NetconfProtocolError):
    """This exception is raised when no frame boundary is found within the buffer limit

    :ivar int buffered: Number of octets buffered without a boundary
    :ivar int max_size: The configured maximum frame size

    """

    def __init__(self, buffered, max_size):
        self.buffered = buffered
        self.max_size = max_size
        super(FrameTooLargeError, self).__init__(
            "No frame boundary within {} octets (limit is {})".format(
                buffered, max_size
            )
        )


class HelloEncodeError(NetconfTransportException):
    """This exception is raised when a ``<hello>`` cannot be serialized"""

    pass


class HelloDecodeError(NetconfTransportException):
    """This exception is raised when a received ``<hello>`` is not well formed

    :ivar bytes raw: The raw frame that was received

    """

    def __init__(self, raw, msg):
        self.raw = raw
        super(HelloDecodeError, self).__init__(msg)
