from namespace_locator import ns_loc
from namespace_locator.examples.slot_table import main, strip_tag
from tests.conftest import EXAMPLE_MAIN_ALIGNED


def test_strip_tag():
    assert strip_tag("erc7201:example.main") == "example.main"
    assert strip_tag("example.main") == "example.main"


def test_prints_slots(capsys):
    assert main(["example.main", "erc7201:acme.vault"]) == 0
    out = capsys.readouterr().out.splitlines()
    assert out == [f"example.main\t{ns_loc('example.main').hex()}",
                   f"acme.vault\t{ns_loc('acme.vault').hex()}"]


def test_fields(capsys):
    main(["example.main", "--fields", "3"])
    out  = capsys.readouterr().out.splitlines()
    base = ns_loc("example.main")
    assert out[1:] == [f"  +{k}\t{(base + k).hex()}" for k in range(3)]


def test_aligned(capsys):
    main(["--aligned", "example.main"])
    assert capsys.readouterr().out.split("\t")[1].strip() == hex(EXAMPLE_MAIN_ALIGNED)


def test_verify_exit_status(capsys):
    slot = ns_loc("example.main").hex()
    assert main(["example.main", "--verify", slot]) == 0
    assert main(["example.other", "--verify", slot]) == 1
    out = capsys.readouterr().out
    assert "match" in out and "MISMATCH" in out


def test_strict_reports_bad_ids(capsys):
    assert main(["--strict", "bad id", "example.main"]) == 2
    captured = capsys.readouterr()
    assert "contains whitespace" in captured.err
    assert "example.main" in captured.out
