import argparse
import pytest

from sponge_tools_cli import main, parse_hex_or_ascii


@pytest.mark.parametrize("command", ["asakey", "dss"])
def test_stream_demo_decrypts(command, capsys):
    rc = main(["--seed", "1", "--rounds", "1", command, "-k", "16", "--blocks", "2",
               "--message", "sponge"])
    out = capsys.readouterr().out
    assert rc == 0
    assert f"[{command}] round 1, output:" in out
    assert f"[{command}] decrypted:  'sponge'" in out


def test_stream_demo_with_explicit_key_and_nonce(capsys):
    rc = main(["--rounds", "1", "asakey", "-k", "16", "--key", "0x0102", "--nonce", "abc!"])
    assert rc == 0
    assert "[asakey] key:   201" in capsys.readouterr().out


def test_duplex_demo_word_shape(capsys):
    rc = main(["--seed", "2", "--shape", "word", "duplex", "-b", "64", "-r", "4", "-k", "4",
               "--sessions", "2", "--calls", "8"])
    out = capsys.readouterr().out
    assert rc == 0
    assert out.count("[duplex] session") == 2


def test_prng_demo(capsys):
    rc = main(["--seed", "3", "--rounds", "1", "prng", "--batches", "2", "--calls", "2"])
    out = capsys.readouterr().out
    assert rc == 0
    assert "[prng] output 1: 0x" in out


def test_bad_parameters_are_reported(capsys):
    rc = main(["--shape", "word", "asakey"])
    assert rc == 2
    assert "[error]" in capsys.readouterr().out


def test_parse_hex_or_ascii():
    assert parse_hex_or_ascii("0x0102", 4) == b"\x01\x02\x00\x00"
    assert parse_hex_or_ascii("hello!", 3) == b"hel"
    with pytest.raises(argparse.ArgumentTypeError):
        parse_hex_or_ascii("abc", 4)
