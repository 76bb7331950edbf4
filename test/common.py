SERVER_HELLO = b"""
  <hello xmlns="urn:ietf:params:xml:ns:netconf:base:1.0">
    <capabilities>
      <capability>urn:ietf:params:netconf:base:1.1</capability>
      <capability>http://example.com/foo</capability>
    </capabilities>
    <session-id>4</session-id>
  </hello>
"""

TEST_RPC = b"""
  <rpc message-id="101" xmlns="urn:ietf:params:xml:ns:netconf:base:1.0">
    <some-method/>
  </rpc>
"""

TEST_RPC_REPLY = b"""
<rpc-reply message-id="101"
     xmlns="urn:ietf:params:xml:ns:netconf:base:1.0"
     xmlns:ex="http://example.net/content/1.0"
     ex:user-id="fred">
  <data />
</rpc-reply>
"""


class MockSock:
    """Hands out the given byte strings one per ``recv``, then end-of-stream"""

    def __init__(self, recvs):
        self.recvs = list(recvs)
        self.recv_sizes = []
        self.sent = []
        self.closed = False

    def sendall(self, b):
        if self.closed:
            raise OSError("socket is closed")
        self.sent.append(b)

    def recv(self, n=-1):
        if self.closed:
            raise OSError("socket is closed")
        self.recv_sizes.append(n)
        if not self.recvs:
            return b""
        return self.recvs.pop(0)

    def close(self):
        self.closed = True


def byte_by_byte(data):
    return [data[i : i + 1] for i in range(len(data))]
