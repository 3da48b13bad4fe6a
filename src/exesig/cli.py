import argparse
import logging
import os
import sys

from exesig import __version__
from exesig.keys import (
    SignatureCheck,
    load_embedded_public_key,
    load_public_key_file,
)
from exesig.signing import RSAVerifier, signature_path_for

__author__ = "exesig developers"
__copyright__ = "(c) 2026 exesig developers"
__license__ = "MIT"

# Path to a PEM public key that overrides the one embedded in this build.
PUBLIC_KEY_ENV_VAR = "EXESIG_PUBLIC_KEY"


class ExesigCLI:
    def __init__(self, args):
        self.logger = logging.getLogger(__name__)
        self.logger.debug("Parsing args: %s", str(args))
        self.args = self.parse_args(args)
        logformat = "[%(asctime)s] %(levelname)s:%(name)s:%(message)s"
        logging.basicConfig(
            level=self.args.loglevel,
            stream=sys.stdout,
            format=logformat,
            datefmt="%Y-%m-%d %H:%M:%S",
        )

    def run_command(self):
        """
        parse_args() will set self.args.func() to the function we wish to
        execute, based on the subcommand the user ran. These 'action functions'
        will return the integer exit code with which we exit at the very end.

        Roughly:
        0 = success
        1 = error (e.g. public key file missing or unreadable)
        2 = signature checking is disabled, nothing was verified
        3 = signature verification failed
        """
        return self.args.func()

    def parse_args(self, args):
        """
        Parse command line parameters

        Args:
          args (List[str]): command line parameters as list of strings
              (for example  ``["--help"]``).

        Returns:
          :obj:`argparse.Namespace`: command line parameters namespace
        """

        parser = argparse.ArgumentParser(
            description="Verify detached RSA signatures of executables"
        )
        parser.add_argument(
            "--version",
            action="version",
            version="exesig {ver}".format(ver=__version__),
        )
        parser.add_argument(
            "--debug",
            help="Print a bunch of debug info",
            action="store_const",
            dest="loglevel",
            const=logging.DEBUG,
        )
        parser.add_argument(
            "--nocolor",
            help="Disable color output",
            required=False,
            dest="nocolor",
            default=True if len(os.environ.get("NO_COLOR", "")) else False,
            action="store_true",
        )

        commands = parser.add_subparsers(
            required=True, dest="command", metavar="COMMAND"
        )

        # command: verify
        cmd_verify = commands.add_parser(
            "verify",
            help="Verify the detached signature of one or more executables",
        )
        cmd_verify.set_defaults(func=self.verify)
        cmd_verify.add_argument(
            "--public-key",
            help=(
                "PEM file with the RSA public key to verify against. "
                f"(default: ${PUBLIC_KEY_ENV_VAR}, then the key embedded in this build)"
            ),
            required=False,
            metavar="PUBLIC_KEY",
            dest="public_key",
            default=None,
        )
        cmd_verify.add_argument(
            "executables",
            help="The files whose signatures are verified",
            metavar="EXECUTABLE",
            nargs="+",
        )

        # command: signature-path
        cmd_signature_path = commands.add_parser(
            "signature-path",
            help="Print where the detached signature of each executable is expected",
        )
        cmd_signature_path.set_defaults(func=self.signature_path)
        cmd_signature_path.add_argument(
            "executables",
            help="The files to locate signatures for",
            metavar="EXECUTABLE",
            nargs="+",
        )
        return parser.parse_args(args)

    def _error(self, msg):
        if self.args.nocolor:
            print(f"[ERROR] {msg}")
        else:
            print(f"[\033[91mERROR\033[0m] {msg}")

    def _ok(self, msg):
        if self.args.nocolor:
            print(f"[OK   ] {msg}")
        else:
            print(f"[\033[92mOK   \033[0m] {msg}")

    def _note(self, msg):
        if self.args.nocolor:
            print(f"[NOTE ] {msg}")
        else:
            print(f"[\033[94mNOTE \033[0m] {msg}")

    def _warn(self, msg):
        if self.args.nocolor:
            print(f"[WARN ] {msg}")
        else:
            print(f"[\033[93mWARN \033[0m] {msg}")

    def _load_public_key(self):
        """
        Find the public key to trust: --public-key first, then the environment,
        then the key embedded in this build. Returns None (after printing an
        error) if a key file cannot be read. A build without an embedded key
        gives empty bytes, which means signature checking is disabled.
        """
        key_path = self.args.public_key
        if key_path is None:
            key_path = os.environ.get(PUBLIC_KEY_ENV_VAR) or None
            if key_path is not None:
                self.logger.debug(
                    "Taking public key path from %s env var", PUBLIC_KEY_ENV_VAR
                )

        if key_path is None:
            self.logger.debug("Using the public key embedded in this build")
            try:
                return load_embedded_public_key()
            except OSError as e:
                self._error(
                    f"Could not read the embedded public key {e.filename}: {e.strerror}"
                )
                return None

        try:
            return load_public_key_file(key_path)
        except OSError as e:
            self._error(f"Could not read public key file {key_path}: {e.strerror}")
            return None

    def verify(self):
        public_key = self._load_public_key()
        if public_key is None:
            return 1

        verifier = RSAVerifier(public_key)
        if verifier.signature_check is SignatureCheck.DISABLED:
            self._warn("Signature checking is disabled: no public key is configured.")
            self._note(
                f"Pass --public-key or set {PUBLIC_KEY_ENV_VAR} to verify executables."
            )
            return 2

        retcode = 0
        for executable in self.args.executables:
            result = verifier.verify(executable)
            if result.success is not True:
                self._error(f"{executable}: {result.summary}")
                self.logger.debug(
                    "%s (%s): %s",
                    executable,
                    type(result.error).__name__,
                    result.extra_information,
                )
                retcode = 3
                continue
            self._ok(f"{executable}: {result.summary}")

        if retcode != 0:
            self._note("Re-run with the global --debug flag for more information.")
        return retcode

    def signature_path(self):
        for executable in self.args.executables:
            print(signature_path_for(executable))
        return 0


def main(args):
    cli = ExesigCLI(args)
    cli.logger.debug("Running requested command/passing to function")
    exitcode = cli.run_command()
    cli.logger.info("Script ends here, rc=%d", exitcode)
    return exitcode


def run():
    """Calls :func:`main` passing the CLI arguments extracted from :obj:`sys.argv`

    This function can be used as entry point to create console scripts with setuptools.
    """
    return main(sys.argv[1:])


if __name__ == "__main__":
    sys.exit(run())
