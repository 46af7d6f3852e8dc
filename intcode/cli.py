"""intcode CLI entry point."""

from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import List, Optional, Tuple

from .amplifiers import max_chain_output, max_looped_output
from .ascii import AsciiIO, AsciiTerminal, run_script
from .computer import Computer
from .disassembler import disassemble, format_listing
from .errors import IntcodeError
from .loader import load_program
from .network import DEFAULT_NETWORK_SIZE, Network

LOG = logging.getLogger("intcode.cli")


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _parse_patch(text: str) -> Tuple[int, int]:
    address, sep, value = text.partition("=")
    if not sep:
        raise argparse.ArgumentTypeError(f"expected ADDRESS=VALUE, got {text!r}")
    try:
        return int(address, 0), int(value, 0)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"expected integers in {text!r}") from exc


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="intcode", description="Intcode virtual machine")
    parser.add_argument("program", type=Path, help="File holding the comma separated program")
    parser.add_argument(
        "-i",
        "--input",
        dest="inputs",
        type=int,
        action="append",
        default=[],
        help="Queue an input value (repeatable)",
    )
    parser.add_argument(
        "-p",
        "--patch",
        type=_parse_patch,
        action="append",
        default=[],
        metavar="ADDRESS=VALUE",
        help="Overwrite a memory cell before running (repeatable)",
    )
    parser.add_argument("--line", dest="lines", action="append", default=[], help="ASCII input line (repeatable, implies --ascii)")
    parser.add_argument("--trace", action="store_true", help="Log every executed instruction at DEBUG level")
    parser.add_argument("--max-steps", type=int, default=None, help="Safety cap on executed steps")
    parser.add_argument(
        "--log-level",
        default=os.environ.get("INTCODE_LOG", "WARNING"),
        help="Logging level (default WARNING, or $INTCODE_LOG)",
    )
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument("--ascii", action="store_true", help="Treat output as ASCII text")
    mode.add_argument("--interactive", action="store_true", help="Run an interactive ASCII terminal")
    mode.add_argument("--disassemble", action="store_true", help="Print a listing instead of running")
    mode.add_argument(
        "--amplifiers",
        choices=("series", "feedback"),
        help="Search phase settings for an amplifier chain",
    )
    mode.add_argument(
        "--network",
        choices=("first", "nat"),
        help="Boot a packet network: report the first NAT packet or the first repeated NAT wake value",
    )
    parser.add_argument("--network-size", type=int, default=DEFAULT_NETWORK_SIZE, help="Computers in --network mode")
    return parser


def _run_plain(program: List[int], args: argparse.Namespace) -> int:
    computer = Computer(program, trace=args.trace)
    for address, value in args.patch:
        computer.patch(address, value)
    outputs = computer.run_to_completion(args.inputs, max_steps=args.max_steps)
    if outputs:
        for value in outputs:
            print(value)
    else:
        print(f"[0] = {computer.memory.get(0)}")
    LOG.info("halted after %d steps", computer.steps)
    return 0


def _run_ascii(program: List[int], args: argparse.Namespace) -> int:
    io = run_script(program, args.lines, patches=args.patch, trace=args.trace)
    text = io.take_text()
    if text:
        sys.stdout.write(text)
    for value in io.results:
        print(value)
    return 0


def _run_interactive(program: List[int], args: argparse.Namespace) -> int:
    computer = Computer(program, io=AsciiIO(), trace=args.trace)
    for address, value in args.patch:
        computer.patch(address, value)
    result = AsciiTerminal(computer).run()
    if result is not None:
        print(result)
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_arg_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.log_level)
    try:
        program = load_program(args.program)
        if args.disassemble:
            print(format_listing(disassemble(program)))
            return 0
        if args.amplifiers:
            search = max_chain_output if args.amplifiers == "series" else max_looped_output
            value, phases = search(program)
            print(f"{value} phases={','.join(str(phase) for phase in phases)}")
            return 0
        if args.network:
            network = Network(program, args.network_size, trace=args.trace)
            value = network.first_packet_to_nat() if args.network == "first" else network.run_until_repeat()
            print(value)
            return 0
        if args.interactive:
            return _run_interactive(program, args)
        if args.ascii or args.lines:
            return _run_ascii(program, args)
        return _run_plain(program, args)
    except OSError as exc:
        print(f"intcode: {exc}", file=sys.stderr)
        return 1
    except IntcodeError as exc:
        LOG.debug("run failed", exc_info=True)
        print(f"intcode: {exc}", file=sys.stderr)
        return 1
