import pytest

from exesig import keys
from exesig.cli import PUBLIC_KEY_ENV_VAR, main

__author__ = "exesig developers"
__copyright__ = "(c) 2026 exesig developers"
__license__ = "MIT"


@pytest.fixture
def public_key_file(tmp_path, trusted_public_pem):
    path = tmp_path / "key.pub"
    path.write_bytes(trusted_public_pem)
    return path


@pytest.fixture
def no_embedded_key(monkeypatch, tmp_path):
    monkeypatch.delenv(PUBLIC_KEY_ENV_VAR, raising=False)
    monkeypatch.setattr(
        keys, "EMBEDDED_KEY_PATH", str(tmp_path / "no-such-key.pem")
    )


@pytest.mark.parametrize(
    "args, exp_stdout_substr, exp_rc",
    [
        (
            ["--debug", "--nocolor", "verify", "--public-key={keyfile}", "{exe}"],
            "Executable signature verification succeeded.",
            0,
        ),
        (
            ["--nocolor", "verify", "--public-key={keyfile}", "{unsigned}"],
            "Failed to open signature file",
            3,
        ),
        (
            ["--nocolor", "verify", "--public-key={keyfile}", "{exe}", "{unsigned}"],
            "Re-run with the global --debug flag",
            3,
        ),
        (
            ["--nocolor", "verify", "--public-key={keyfile}", "{missing}"],
            "Failed to open executable",
            3,
        ),
        (
            ["--nocolor", "verify", "--public-key=/file/does/not/exist", "{exe}"],
            "Could not read public key file /file/does/not/exist",
            1,
        ),
    ],
)
def test_main_verify(
    capsys,
    tmp_path,
    signed_executable,
    public_key_file,
    no_embedded_key,
    args,
    exp_stdout_substr,
    exp_rc,
):
    unsigned = tmp_path / "unsigned.exe"
    unsigned.write_bytes(b"unsigned")
    interpolation = {
        "keyfile": public_key_file,
        "exe": signed_executable,
        "unsigned": unsigned,
        "missing": tmp_path / "missing.exe",
    }
    interpolated_args = [arg.format(**interpolation) for arg in args]
    rc = main(interpolated_args)
    captured = capsys.readouterr()
    assert exp_stdout_substr in captured.out
    assert rc == exp_rc


def test_main_verify_key_from_env(
    capsys, monkeypatch, signed_executable, public_key_file, no_embedded_key
):
    monkeypatch.setenv(PUBLIC_KEY_ENV_VAR, str(public_key_file))
    rc = main(["--nocolor", "verify", str(signed_executable)])
    captured = capsys.readouterr()
    assert "[OK   ]" in captured.out
    assert rc == 0


def test_main_verify_embedded_key(
    capsys, monkeypatch, signed_executable, public_key_file
):
    monkeypatch.delenv(PUBLIC_KEY_ENV_VAR, raising=False)
    monkeypatch.setattr(keys, "EMBEDDED_KEY_PATH", str(public_key_file))
    rc = main(["--nocolor", "verify", str(signed_executable)])
    captured = capsys.readouterr()
    assert "Executable signature verification succeeded." in captured.out
    assert rc == 0


def test_main_verify_disabled(capsys, signed_executable, no_embedded_key):
    rc = main(["--nocolor", "verify", str(signed_executable)])
    captured = capsys.readouterr()
    assert "Signature checking is disabled" in captured.out
    assert rc == 2


def test_main_verify_color(capsys, signed_executable, public_key_file, monkeypatch):
    monkeypatch.delenv("NO_COLOR", raising=False)
    rc = main(["verify", f"--public-key={public_key_file}", str(signed_executable)])
    captured = capsys.readouterr()
    assert "\033[92mOK   \033[0m" in captured.out
    assert rc == 0


def test_main_signature_path(capsys):
    rc = main(["signature-path", "/a/b/prog.exe", "/opt/tool"])
    captured = capsys.readouterr()
    assert captured.out.splitlines() == [
        "/a/b/signatures/prog.sig",
        "/opt/signatures/tool.sig",
    ]
    assert rc == 0


def test_main_version(capsys):
    with pytest.raises(SystemExit) as ex:
        main(["--version"])
    assert ex.value.code == 0
    assert "exesig" in capsys.readouterr().out


def test_main_verify_unreadable_embedded_key(
    capsys, monkeypatch, tmp_path, signed_executable
):
    monkeypatch.delenv(PUBLIC_KEY_ENV_VAR, raising=False)
    monkeypatch.setattr(keys, "EMBEDDED_KEY_PATH", str(tmp_path))
    rc = main(["--nocolor", "verify", str(signed_executable)])
    captured = capsys.readouterr()
    assert "Could not read the embedded public key" in captured.out
    assert rc == 1


def test_main_verify_key_file_is_directory(capsys, tmp_path, signed_executable):
    rc = main(
        ["--nocolor", "verify", f"--public-key={tmp_path}", str(signed_executable)]
    )
    captured = capsys.readouterr()
    assert f"Could not read public key file {tmp_path}" in captured.out
    assert "No such file or directory" not in captured.out
    assert rc == 1
