"""The Command Line Interface for the utility, including Interactive elements.

A hybrid CLI/ICLI (Command Line Interface/Interactive Command Line Interface) that prompts for whatever the command
line left out, unless told to run non-interactively, in which case missing required arguments are an error.

Typical usage example:

    blockrsa keygen --keysize 1024 -p key.pub -P key.pem
    blockrsa -n encrypt -p key.pub -i secret.txt -o secret.bin
    python -m blockrsa decrypt --key "<d> <n>" -i secret.bin -o secret.txt
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import argparse
import logging
import pathlib
import sys
import typing

import blockrsa
from blockrsa.randomness import RandomSource

logger = logging.getLogger("blockrsa.cli")


class HelpData(typing.NamedTuple):
    description: str
    format: typing.Type = str
    choices: list[str] | None = None
    default: typing.Any = None
    advanced: bool = False


help_dict: dict[str, HelpData] = {
    "subcommand":
        HelpData(
            description="The available subcommands in blockrsa.",
            choices=["keygen", "encrypt", "decrypt"],
        ),
    "keygen":
        HelpData("Key pair generation utility."),
    "encrypt":
        HelpData("File encryption utility."),
    "decrypt":
        HelpData("File decryption utility."),
    "public_key":
        HelpData(
            description="Location of the public key file (PEM).",
            format=pathlib.Path,
        ),
    "private_key":
        HelpData(
            description="Location of the private key file (PEM).",
            format=pathlib.Path,
        ),
    "key":
        HelpData(description="Key as decimal text: '<exponent> <modulus>'. Replaces the key file."),
    "input":
        HelpData(
            description="File to read.",
            format=pathlib.Path,
        ),
    "output":
        HelpData(
            description="File to write.",
            format=pathlib.Path,
        ),
    "keysize":
        HelpData(
            description="Key size (in bits). Even, at least 10.",
            format=int,
            default=1024,
        ),
    "seed":
        HelpData(
            description="Seed for the random number generator. Makes key generation reproducible.",
            format=int,
            advanced=True,
        ),
    "overwrite":
        HelpData(
            description="Overwrite specified destination files if they exist?",
            choices=["Y", "N"],
            default="N",
        )
}

needs = {
    "keygen": ("public_key", "private_key", "keysize"),
    "encrypt": ("public_key", "input", "output"),
    "decrypt": ("private_key", "input", "output"),
}

pubkey = argparse.ArgumentParser(add_help=False)
pubkey.add_argument("--public_key", "-p", type=help_dict["public_key"].format, help=help_dict["public_key"].description)
privkey = argparse.ArgumentParser(add_help=False)
privkey.add_argument("--private_key",
                     "-P",
                     type=help_dict["private_key"].format,
                     help=help_dict["private_key"].description)
textkey = argparse.ArgumentParser(add_help=False)
textkey.add_argument("--key", "-k", type=help_dict["key"].format, help=help_dict["key"].description)
files = argparse.ArgumentParser(add_help=False)
files.add_argument("--input", "-i", type=help_dict["input"].format, help=help_dict["input"].description)
files.add_argument("--output", "-o", type=help_dict["output"].format, help=help_dict["output"].description)
corep = argparse.ArgumentParser(prog="blockrsa")
corep.add_argument("--version", "-v", action="version", version=f"%(prog)s {blockrsa.__version__}")
corep.add_argument("--non-interactive", "-n", action="store_true", help="Enable non-interactive mode")
corep.add_argument("--advanced", "-a", action="store_true", help="Enable advanced mode, for interactive mode")
corep.add_argument("--verbose", "-V", action="store_true", help="Log progress to stderr")
commands = corep.add_subparsers(dest="subcommand", title="Subcommands")

keygen = commands.add_parser("keygen", parents=[privkey, pubkey], help=help_dict["keygen"].description)
keygen.add_argument("--keysize", type=help_dict["keysize"].format, help=help_dict["keysize"].description)
keygen.add_argument("--seed", type=help_dict["seed"].format, help=help_dict["seed"].description)
keygen.add_argument("--overwrite", action="store_const", const="Y", help=help_dict["overwrite"].description)

encrypt = commands.add_parser("encrypt", parents=[pubkey, textkey, files], help=help_dict["encrypt"].description)
decrypt = commands.add_parser("decrypt", parents=[privkey, textkey, files], help=help_dict["decrypt"].description)


def checkmodes(arg: str, mode: tuple[bool, bool]):
    helper_data = help_dict[arg]
    if (mode[0] or (helper_data.advanced and not mode[1])) and helper_data.default:
        return helper_data.default
    if mode[0]:
        raise IOError(f"Argument {arg} is missing and non-interactive mode is active.")
    return helper_data


def choice_handler(arg: str, mode: tuple[bool, bool], prntr: typing.Callable = print):
    helper_data = checkmodes(arg, mode)
    if not isinstance(helper_data, HelpData):
        return helper_data
    prntr(f"Please specify the {arg}!")
    prntr("Description: " + helper_data.description)
    for choice in helper_data.choices:
        defstring = " (Default)" if choice == helper_data.default else ""
        if help_dict.get(choice, None):
            prntr(f"{choice} - {help_dict[choice].description}" + defstring)
        else:
            prntr(f"{choice}" + defstring)
    if helper_data.default is not None:
        prntr("To accept default just click enter. Otherwise specify value.")
    while True:
        ch = input(f"{arg}: ")
        if ch in helper_data.choices:
            return ch
        if not ch and helper_data.default is not None:
            return helper_data.default
        prntr("Please select an option from the list.")


def input_handler(arg: str, mode: tuple[bool, bool], prntr: typing.Callable = print):
    helper_data = checkmodes(arg, mode)
    if not isinstance(helper_data, HelpData):
        return helper_data
    prntr(f"Please specify the {arg}!")
    prntr("Description: " + helper_data.description)
    if helper_data.default is not None:
        prntr(f"Default value: {helper_data.default}")
        prntr("To accept default just click enter. Otherwise specify value.")
    cls = helper_data.format
    while True:
        ch = input(f"{arg}: ")
        if not ch and helper_data.default is not None:
            return helper_data.default
        if ch == "":
            prntr("Please provide a value.")
            continue
        try:
            return cls(ch)
        except ValueError:
            prntr(f"We could not convert your value to {cls.__name__}.")


def load_key(args: argparse.Namespace) -> blockrsa.RSAKey:
    """Resolve the key for encrypt/decrypt, preferring decimal text over key files."""
    if args.key is not None:
        return blockrsa.key_from_text(args.key)
    if args.subcommand == "encrypt":
        return blockrsa.RSAPubKey.import_key(args.public_key)
    return blockrsa.RSAPrivKey.import_key(args.private_key)


def main(argv: list[str] | None = None) -> None:
    """Core Hybrid CLI/ICLI (Command Line Interface/Interactive Command Line Interface)"""
    args = corep.parse_args(argv)
    pstatus = (args.non_interactive, args.advanced)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING,
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    def pspr(text: str):
        """Print only if not in non-interactive mode."""
        if not pstatus[0]:
            print(text)

    pspr("Welcome to blockrsa!\n")
    if not args.subcommand:
        args.subcommand = choice_handler("subcommand", pstatus)
        for opt in ("public_key", "private_key", "key", "input", "output", "keysize", "seed", "overwrite"):
            setattr(args, opt, getattr(args, opt, None))
    for reqs in needs[args.subcommand]:
        if reqs in ("public_key", "private_key") and args.subcommand != "keygen" and args.key is not None:
            continue
        if getattr(args, reqs, None) is None:
            if help_dict[reqs].choices is not None:
                res = choice_handler(reqs, pstatus)
            else:
                res = input_handler(reqs, pstatus)
            setattr(args, reqs, res)
        else:
            pspr(f"{reqs}: {getattr(args, reqs)}")
    pspr("\nInput Complete! Executing...")
    try:
        match args.subcommand:
            case "keygen":
                if args.private_key.exists() or args.public_key.exists():
                    rs = getattr(args, "overwrite", None)
                    if rs is None:
                        rs = choice_handler("overwrite", pstatus, pspr)
                    if rs == "N":
                        print("Destination private or public key already exists!")
                        return
                rng = RandomSource(args.seed) if args.seed is not None else None
                pair = blockrsa.generate_key_pair(int(args.keysize), rng=rng)
                pair.private.export(args.private_key)
                pair.public.export(args.public_key)
                pspr("\nKey pair generated!")
                print(f"Public key: e={pair.public.expo}, n={pair.public.mod}")
                print(f"Private key: d={pair.private.expo}, n={pair.private.mod}")
            case "encrypt" | "decrypt":
                key = load_key(args)
                written = blockrsa.process_file(args.input, args.output, key, args.subcommand)
                pspr(f"Done. {written} bytes written to {args.output}")
    except (blockrsa.BlockRSAError, ValueError, OSError) as exc:
        logger.debug("Command %s failed.", args.subcommand, exc_info=True)
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(1)
    pspr("Thank you for using blockrsa!")
    pspr("Goodbye!")


if __name__ == "__main__":
    main()
