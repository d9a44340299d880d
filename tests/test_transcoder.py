import math

import pytest

from binqr import transcoder
from binqr.errors import MalformedEncoding


def test_encode_known_bytes():
    assert transcoder.encode(bytes([0x00, 0x01, 0x02])) == "AAEC"


def test_empty_payload_round_trips():
    assert transcoder.encode(b"") == ""
    assert transcoder.decode("") == b""


@pytest.mark.parametrize("n", range(0, 10))
def test_encoded_length_is_padded_to_quads(n):
    text = transcoder.encode(b"\xab" * n)
    assert len(text) == math.ceil(n / 3) * 4


@pytest.mark.parametrize(
    "data",
    [
        b"\x00",
        bytes(range(256)),
        b"\xff\xfe\xfd invalid utf-8 \x80",
        "assay sheet ✓".encode("utf-8"),
    ],
)
def test_decode_inverts_encode(data):
    assert transcoder.decode(transcoder.encode(data)) == data


def test_output_uses_standard_alphabet():
    text = transcoder.encode(bytes(range(256)))
    allowed = set("ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789+/=")
    assert set(text) <= allowed


@pytest.mark.parametrize("text", ["AAE!", "AAE", "A", "AA=A", "AA EC", "ÄÄÄÄ", "AAEC-_==", "AAEC=", "AAEC====", "YQ==YQ=="])
def test_decode_rejects_malformed_text(text):
    with pytest.raises(MalformedEncoding):
        transcoder.decode(text)
