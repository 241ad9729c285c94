import os

from pseis.errors import ConfigurationError
from pseis.utils.getpars import GetPars, load_parfile, parse_pars

import pytest


def test_parse_pars():
    assert parse_pars(["limit=1e-3", "endian=big"]) == {
        "limit": "1e-3",
        "endian": "big",
    }
    assert parse_pars(["a=1", "a=2"]) == {"a": "2"}
    assert parse_pars(["key=a=b"]) == {"key": "a=b"}
    with pytest.raises(ConfigurationError):
        parse_pars(["limit"])
    with pytest.raises(ConfigurationError):
        parse_pars(["=1"])


def test_getparfloat():
    getpars = GetPars(["limit=1.0e-3"])
    assert getpars.getparfloat("limit") == 1.0e-3
    assert getpars.getparfloat("missing") is None
    getpars.checkpars()


def test_getparfloat_not_a_number():
    getpars = GetPars(["limit=abc"])
    with pytest.raises(ConfigurationError, match="not a number"):
        getpars.getparfloat("limit")


def test_getparint():
    getpars = GetPars(["verbose=2", "n=x"])
    assert getpars.getparint("verbose") == 2
    with pytest.raises(ConfigurationError):
        getpars.getparint("n")


def test_checkpars_unknown():
    getpars = GetPars(["limit=1", "lmit=2"])
    getpars.getparfloat("limit")
    with pytest.raises(ConfigurationError, match="lmit"):
        getpars.checkpars()


def test_parfile(tmpdir):
    parfile = os.path.join(tmpdir, "test.par")
    with open(parfile, "w") as fid:
        fid.write("# regression test\nlimit=1e-2 endian=big\n")
    assert load_parfile(parfile) == {"limit": "1e-2", "endian": "big"}

    getpars = GetPars([f"par={parfile}", "endian=little"])
    assert getpars.getparfloat("limit") == 1e-2
    assert getpars.getparstring("endian") == "little"
    getpars.checkpars()


def test_yaml_parfile(tmpdir):
    parfile = os.path.join(tmpdir, "test.yaml")
    with open(parfile, "w") as fid:
        fid.write("limit: 0.001\nverbose: 1\n")
    getpars = GetPars([f"par={parfile}"])
    assert getpars.getparfloat("limit") == 0.001
    assert getpars.getparint("verbose") == 1

    with open(parfile, "w") as fid:
        fid.write("- 1\n- 2\n")
    with pytest.raises(ConfigurationError, match="yaml mapping"):
        GetPars([f"par={parfile}"])


def test_missing_parfile(tmpdir):
    with pytest.raises(ConfigurationError):
        GetPars([f"par={tmpdir}/missing.par"])
