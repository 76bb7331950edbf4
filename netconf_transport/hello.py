from lxml import etree

from netconf_transport.constants import DEFAULT_CAPABILITIES, NAMESPACES
from netconf_transport.error import HelloEncodeError, HelloDecodeError


def _qname(tag):
    return etree.QName(NAMESPACES["nc"], tag)


class HelloMessage:
    """The ``<hello>`` exchanged by both peers when a session starts

    Instances are immutable; build a new one for every handshake.

    :ivar tuple capabilities: Capability URIs in the order they were
                              advertised

    :ivar session_id: The ``int`` session id assigned by the server, or
                      ``None`` when sent by a client

    """

    __slots__ = ("_capabilities", "_session_id")

    def __init__(self, capabilities=DEFAULT_CAPABILITIES, session_id=None):
        self._capabilities = tuple(capabilities)
        self._session_id = session_id or None

    @property
    def capabilities(self):
        return self._capabilities

    @property
    def session_id(self):
        return self._session_id

    def __eq__(self, other):
        if not isinstance(other, HelloMessage):
            return NotImplemented
        return (self.capabilities, self.session_id) == (
            other.capabilities,
            other.session_id,
        )

    def __hash__(self):
        return hash((self.capabilities, self.session_id))

    def __repr__(self):
        return "HelloMessage(capabilities={!r}, session_id={!r})".format(
            list(self.capabilities), self.session_id
        )


def encode_hello(hello):
    """Serializes a :class:`HelloMessage` to an XML document

    :rtype: bytes
    """
    if not hello.capabilities:
        raise HelloEncodeError("A <hello> must advertise at least one capability")
    try:
        root = etree.Element(_qname("hello"), nsmap={None: NAMESPACES["nc"]})
        caps = etree.SubElement(root, _qname("capabilities"))
        for cap in hello.capabilities:
            etree.SubElement(caps, _qname("capability")).text = cap
        if hello.session_id:
            etree.SubElement(root, _qname("session-id")).text = str(
                int(hello.session_id)
            )
    except (TypeError, ValueError) as e:
        raise HelloEncodeError("Cannot encode <hello>: {}".format(e)) from e
    return etree.tostring(root, xml_declaration=True, encoding="UTF-8")


def decode_hello(raw):
    """Parses a received ``<hello>`` document

    :param bytes raw: The frame payload

    :rtype: :class:`HelloMessage`
    """
    try:
        ele = etree.fromstring(raw)
    except (etree.XMLSyntaxError, ValueError) as e:
        raise HelloDecodeError(raw, "Malformed <hello>: {}".format(e)) from e

    if ele.tag != _qname("hello").text:
        raise HelloDecodeError(raw, "Expected <hello>, got {}".format(ele.tag))

    capabilities = capabilities_from_hello(ele)
    if not capabilities:
        raise HelloDecodeError(raw, "<hello> does not advertise any capability")

    session_id = None
    ids = ele.xpath("/nc:hello/nc:session-id", namespaces=NAMESPACES)
    if ids:
        try:
            session_id = int((ids[0].text or "").strip())
        except ValueError as e:
            raise HelloDecodeError(
                raw, "Invalid session-id {!r}".format(ids[0].text)
            ) from e

    return HelloMessage(capabilities, session_id)


def capabilities_from_hello(hello):
    return [
        (x.text or "").strip()
        for x in hello.xpath(
            "/nc:hello/nc:capabilities/nc:capability", namespaces=NAMESPACES
        )
    ]
