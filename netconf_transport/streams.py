class ReadWriteCloser:
    """Joins a readable and a writable binary file object into one
    duplex stream usable by :class:`netconf_transport.transport.Transport`

    Typical use is a pipe pair, e.g. the stdout and stdin of an
    ``ssh -s host netconf`` subprocess.

    """

    def __init__(self, reader, writer):
        self.reader = reader
        self.writer = writer

    def recv(self, n):
        # read1 returns what is available instead of waiting for n bytes
        read = getattr(self.reader, "read1", self.reader.read)
        return read(n)

    def sendall(self, b):
        self.writer.write(b)
        self.writer.flush()

    def close(self):
        try:
            self.writer.close()
        finally:
            self.reader.close()
