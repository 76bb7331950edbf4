import pytest

from netconf_transport.scanner import Scanner, delimiter_matcher
from netconf_transport.constants import DELIMITER_10
from netconf_transport.error import IncompleteFrameError, FrameTooLargeError

from common import MockSock, byte_by_byte


def test_single_message_single_read_10():
    s = Scanner(MockSock([b"Foo]]>]]>"]))
    assert s.wait_for_bytes(DELIMITER_10) == b"Foo"
    with pytest.raises(IncompleteFrameError):
        s.wait_for_bytes(DELIMITER_10)


def test_multiple_messages_single_read_10():
    s = Scanner(MockSock([b"Foo]]>]]>Bar]]>]]>"]))
    assert s.wait_for_bytes(DELIMITER_10) == b"Foo"
    assert s.wait_for_bytes(DELIMITER_10) == b"Bar"


@pytest.mark.parametrize(
    "reads,expected",
    [
        ([b"Foo", b"]]>]]>"], b"Foo"),
        ([b"Foo", b"Bar", b"]]>]]>"], b"FooBar"),
        ([b"got a longer ", b"message", b"]]>]]>"], b"got a longer message"),
        ([b"partly ]]>]] delimiter", b"]]>]]>"], b"partly ]]>]] delimiter"),
        ([b"partly ]]>]]", b" delimiter]]>]]>"], b"partly ]]>]] delimiter"),
        ([b"Foo]", b"]>]]>"], b"Foo"),
        ([b"Foo]]>", b"]]>"], b"Foo"),
        ([b"Foo]]>]", b"]>"], b"Foo"),
    ],
)
def test_fragmented_message_10(reads, expected):
    s = Scanner(MockSock(reads))
    assert s.wait_for_bytes(DELIMITER_10) == expected
    assert not s.buf


def test_multiple_messages_fragmented_delim_10():
    s = Scanner(MockSock([b"Foo]", b"]>]]", b">", b"Ba", b"r]]>]]>"]))
    assert s.wait_for_bytes(DELIMITER_10) == b"Foo"
    assert s.wait_for_bytes(DELIMITER_10) == b"Bar"


def test_one_byte_per_read():
    sock = MockSock(byte_by_byte(b"hello]]>]]>"))
    s = Scanner(sock)
    assert s.wait_for_bytes(DELIMITER_10) == b"hello"
    assert len(sock.recv_sizes) == len(b"hello]]>]]>")


def test_bytes_after_boundary_are_kept():
    s = Scanner(MockSock([b"Foo]]>]]>Ba", b"r]]>]]>"]))
    assert s.wait_for_bytes(DELIMITER_10) == b"Foo"
    assert s.buf == bytearray(b"Ba")
    assert s.wait_for_bytes(DELIMITER_10) == b"Bar"


def test_buffered_frame_needs_no_read():
    sock = MockSock([b"Foo]]>]]>Bar]]>]]>"])
    s = Scanner(sock)
    s.wait_for_bytes(DELIMITER_10)
    s.wait_for_bytes(DELIMITER_10)
    assert len(sock.recv_sizes) == 1


def test_unexpected_end_of_stream():
    s = Scanner(MockSock([b"Any data, but no delimiter HERE"]))
    with pytest.raises(IncompleteFrameError) as excinfo:
        s.wait_for_bytes(DELIMITER_10)
    assert excinfo.value.buffered == len(b"Any data, but no delimiter HERE")


def test_end_of_stream_on_empty_buffer():
    s = Scanner(MockSock([]))
    with pytest.raises(IncompleteFrameError) as excinfo:
        s.wait_for_bytes(DELIMITER_10)
    assert excinfo.value.buffered == 0


def test_read_error_is_propagated():
    class FailingSock:
        def recv(self, _):
            raise ConnectionResetError("peer reset")

    s = Scanner(FailingSock())
    with pytest.raises(ConnectionResetError):
        s.wait_for_bytes(DELIMITER_10)


def test_reads_half_the_buffer():
    sock = MockSock([b"abc", b"]]>]]>"])
    Scanner(sock, buffer_size=16).wait_for_bytes(DELIMITER_10)
    assert sock.recv_sizes == [8, 8]


def test_frame_larger_than_buffer():
    payload = bytes(range(256)) * 40
    reads = [payload[i : i + 8] for i in range(0, len(payload), 8)] + [DELIMITER_10]
    s = Scanner(MockSock(reads), buffer_size=16)
    assert s.wait_for_bytes(DELIMITER_10) == payload


def test_frame_too_large():
    s = Scanner(MockSock([b"abcd"] * 10), buffer_size=8, max_frame_size=16)
    with pytest.raises(FrameTooLargeError) as excinfo:
        s.wait_for_bytes(DELIMITER_10)
    assert excinfo.value.max_size == 16
    assert excinfo.value.buffered == 20


def test_invalid_sizes():
    with pytest.raises(ValueError):
        Scanner(MockSock([]), buffer_size=1)
    with pytest.raises(ValueError):
        Scanner(MockSock([]), buffer_size=64, max_frame_size=32)


def test_empty_delimiter():
    with pytest.raises(ValueError):
        delimiter_matcher(b"")


def test_custom_match_function():
    def match(buf, _):
        # a frame is any run of bytes ending in a digit
        for i, c in enumerate(buf):
            if chr(c).isdigit():
                return i + 1
        return None

    s = Scanner(MockSock([b"ab", b"c1de2"]))
    assert s.wait_for(match) == bytearray(b"abc1")
    assert s.wait_for(match) == bytearray(b"de2")


def test_match_function_sees_searched_count():
    seen = []

    def match(buf, searched):
        seen.append((len(buf), searched))
        return None

    s = Scanner(MockSock([b"ab", b"cde"]))
    with pytest.raises(IncompleteFrameError):
        s.wait_for(match)
    assert seen == [(0, 0), (2, 0), (5, 2)]


def test_wait_for_string():
    s = Scanner(MockSock([b"login: ", b"\xc3\xbc> rest"]))
    assert s.wait_for_string(">") == "login: ü"
    assert s.buf == bytearray(b" rest")


def test_wait_for_regexp():
    s = Scanner(MockSock([b"\n#1", b"2\nxyz"]))
    frame, groups = s.wait_for_regexp(rb"\n#(\d+)\n")
    assert frame == b"\n#12\n"
    assert groups == [b"12"]
    assert s.wait_for_bytes(b"z") == b"xy"


def test_wait_for_regexp_optional_group():
    s = Scanner(MockSock([b"key=;"]))
    frame, groups = s.wait_for_regexp(rb"(\w+)=(\d+)?;")
    assert frame == b"key=;"
    assert groups == [b"key", None]
