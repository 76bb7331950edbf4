CAP_NETCONF_10 = "urn:ietf:params:netconf:base:1.0"
CAP_NETCONF_11 = "urn:ietf:params:netconf:base:1.1"

DEFAULT_CAPABILITIES = (CAP_NETCONF_10, CAP_NETCONF_11)

NAMESPACES = {
    "nc": "urn:ietf:params:xml:ns:netconf:base:1.0",
}

DELIMITER_10 = b"]]>]]>"
DELIMITER_11 = b"\n##\n"

DELIMITER_10_LEN = len(DELIMITER_10)
DELIMITER_11_LEN = len(DELIMITER_11)

CHUNK_MARKER = b"\n#"
CHUNK_SIZE_MAX = 4294967295  # RFC 6242

# Initial size of the receive window. Each read asks for half of it, so the
# unmatched tail of the previous read plus one new read fit in the window.
BUFFER_SIZE = 8192
MAX_FRAME_SIZE = 64 * 1024 * 1024
