from enum import Enum

from netconf_transport.log import logger
from netconf_transport.chunks import reassemble_chunks
from netconf_transport.constants import (
    BUFFER_SIZE,
    DEFAULT_CAPABILITIES,
    DELIMITER_10,
    DELIMITER_11,
    MAX_FRAME_SIZE,
)
from netconf_transport.error import TransportClosedException
from netconf_transport.framing import ProtocolVersion, encode_frame
from netconf_transport.hello import HelloMessage, encode_hello, decode_hello
from netconf_transport.scanner import Scanner, delimiter_matcher


class TransportState(Enum):
    UNINITIALIZED = "uninitialized"
    HELLO_EXCHANGED = "hello-exchanged"
    NEGOTIATED = "negotiated"
    CLOSED = "closed"


class Transport:
    """Frames NETCONF messages over a duplex byte stream

    This class is a context manager, and should always be either used
    with a ``with`` statement or the :meth:`close` method should be
    called manually when the object is no longer required.

    Every call blocks until the underlying stream completes it. There
    is no internal locking and no timeout; any deadline has to be set
    on the stream itself.

    :param sock: The connection; any object providing ``recv(n)``,
                 ``sendall(b)`` and ``close()`` (a socket, an SSL
                 socket, a paramiko channel or a
                 :class:`netconf_transport.streams.ReadWriteCloser`)

    :param capabilities: Capabilities advertised by :meth:`send_hello`

    :ivar version: The current :class:`ProtocolVersion`

    :ivar state: The current :class:`TransportState`

    :ivar local_hello: The last :class:`HelloMessage` sent

    :ivar remote_hello: The last :class:`HelloMessage` received

    """

    def __init__(
        self,
        sock,
        capabilities=DEFAULT_CAPABILITIES,
        buffer_size=BUFFER_SIZE,
        max_frame_size=MAX_FRAME_SIZE,
    ):
        self.sock = sock
        self.capabilities = tuple(capabilities)
        self.version = ProtocolVersion.V1_0
        self.state = TransportState.UNINITIALIZED
        self.scanner = Scanner(sock, buffer_size, max_frame_size)
        self.local_hello = None
        self.remote_hello = None

    def __enter__(self):
        return self

    def __exit__(self, _, __, ___):
        self.close()

    @property
    def closed(self):
        return self.state is TransportState.CLOSED

    def close(self):
        """Closes the underlying stream; later calls do nothing"""
        if self.closed:
            return
        self.state = TransportState.CLOSED
        logger.debug("Closing transport")
        self.sock.close()

    def set_version(self, version):
        """Switches the framing used by the next :meth:`send` and :meth:`receive`

        :param version: A :class:`ProtocolVersion`, ``"v1.0"`` or ``"v1.1"``
        """
        version = ProtocolVersion.parse(version)
        logger.debug("Updating framing mode to %s", version.value)
        self.version = version
        if not self.closed:
            self.state = TransportState.NEGOTIATED

    def send(self, msg):
        """Sends a raw message framed for the current version

        :param bytes msg: The byte string to send
        """
        self._check_open()
        logger.debug("Sending message: %s", msg)
        self.sock.sendall(encode_frame(self.version, msg))

    def receive(self):
        """Blocks until one complete message has been received

        :rtype: bytes
        """
        self._check_open()
        if self.version is ProtocolVersion.V1_1:
            frame = self.scanner.wait_for(delimiter_matcher(DELIMITER_11))
            length = reassemble_chunks(frame)
            msg = bytes(frame[:length])
        else:
            msg = self.scanner.wait_for_bytes(DELIMITER_10)
        logger.debug("Received message: %s", msg)
        return msg

    def send_hello(self, hello=None):
        """Sends a ``<hello>``

        :param hello: The :class:`HelloMessage` to send; by default one
                      advertising the configured capabilities
        """
        self._check_open()
        if hello is None:
            hello = HelloMessage(self.capabilities)
        self.send(encode_hello(hello))
        self.local_hello = hello
        self._update_hello_state()

    def receive_hello(self):
        """Receives the peer's ``<hello>``

        :rtype: :class:`HelloMessage`
        """
        hello = decode_hello(self.receive())
        self.remote_hello = hello
        self._update_hello_state()
        return hello

    def _update_hello_state(self):
        if (
            self.state is TransportState.UNINITIALIZED
            and self.local_hello is not None
            and self.remote_hello is not None
        ):
            self.state = TransportState.HELLO_EXCHANGED

    def _check_open(self):
        if self.closed:
            raise TransportClosedException("Transport is closed")
