import pytest

from binqr.cli import main


def test_encode_then_decode(tmp_path, capsys):
    source = tmp_path / "sheet.rfa"
    source.write_bytes(b"\x00\x01\x02assay")
    image = tmp_path / "sheet_qr.png"
    restored = tmp_path / "restored.rfa"

    assert main(["encode", str(source), "-o", str(image)]) == 0
    assert image.exists()
    assert "Source file: 'sheet.rfa' (8 bytes)" in capsys.readouterr().out

    assert main(["decode", str(image), "-o", str(restored)]) == 0
    assert restored.read_bytes() == b"\x00\x01\x02assay"


def test_default_output_names(tmp_path):
    source = tmp_path / "sheet.rfa"
    source.write_bytes(b"data")

    assert main(["encode", str(source)]) == 0
    image = tmp_path / "sheet.png"
    assert image.exists()

    source.unlink()
    assert main(["decode", str(image)]) == 0
    assert source.read_bytes() == b"data"


def test_decode_suffix_option(tmp_path):
    source = tmp_path / "payload.bin"
    source.write_bytes(b"xyz")
    main(["encode", str(source), "-o", str(tmp_path / "code.png")])
    assert main(["decode", str(tmp_path / "code.png"), "--suffix", ".out"]) == 0
    assert (tmp_path / "code.out").read_bytes() == b"xyz"


def test_decode_rejects_non_png(tmp_path, capsys):
    image = tmp_path / "code.jpg"
    image.write_bytes(b"whatever")
    assert main(["decode", str(image)]) == 1
    assert "not a PNG image" in capsys.readouterr().err
    assert not (tmp_path / "code.rfa").exists()


def test_encode_missing_file_fails(tmp_path, capsys):
    assert main(["encode", str(tmp_path / "missing.rfa")]) == 1
    assert capsys.readouterr().err.startswith("Error:")


def test_invalid_margin_is_a_usage_error(tmp_path):
    source = tmp_path / "a.bin"
    source.write_bytes(b"a")
    with pytest.raises(SystemExit) as exc:
        main(["encode", str(source), "--margin", "0"])
    assert exc.value.code == 2


def test_encoding_a_png_keeps_the_source(tmp_path):
    source = tmp_path / "x.png"
    source.write_bytes(b"\x89PNG not really")

    assert main(["encode", str(source)]) == 0
    assert source.read_bytes() == b"\x89PNG not really"
    assert (tmp_path / "x_qr.png").exists()


def test_explicit_output_equal_to_source_is_refused(tmp_path, capsys):
    source = tmp_path / "data.bin"
    source.write_bytes(b"keep me")
    assert main(["encode", str(source), "-o", str(source)]) == 1
    assert source.read_bytes() == b"keep me"
    assert "overwrite" in capsys.readouterr().err
