#!/usr/bin/env python3
"""randomly permute non-blank lines of text from an input file into an output file"""
# shuffle: randomly permute lines of text from an input file
# by Ian Kluft
# one of multiple programming language implementations of shuffle (C++, Go, Perl, Python and Rust)
# See https://github.com/ikluft/ikluft-tools/tree/master/shuffle
#
# Open Source licensing under terms of GNU General Public License version 3
# SPDX identifier: GPL-3.0-only
# https://opensource.org/licenses/GPL-3.0
# https://www.gnu.org/licenses/gpl-3.0.en.html
#
# usage: shuffle.py [-i Input.txt] [-o Output.txt] [-s seed] [--atomic] [-v]

import argparse
import logging
import os
import random
import sys
import tempfile
import time
from pathlib import Path

# constants
DEFAULT_INPUT = "Input.txt"
DEFAULT_OUTPUT = "Output.txt"
LOG_FORMAT = "%(name)s: {%(levelname)s} %(message)s"

LOG = logging.getLogger("shuffle")


def _configure_logging(verbose: bool = False):
    """send log records to stderr, INFO and up when verbose"""
    level = logging.INFO if verbose else logging.WARNING
    LOG.setLevel(level)
    for old in list(LOG.handlers):
        LOG.removeHandler(old)
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    LOG.addHandler(handler)


def read_lines(path) -> list:
    """read lines from a text file, skipping blank ones

    Only the line terminator is removed from each line. Lines with other
    whitespace are kept as they are. OSError propagates if the file is
    missing or unreadable.
    """
    lines = []
    with Path(path).open(mode="r", encoding="utf-8") as infile:
        for line in infile:
            if line.endswith("\n"):
                line = line[:-1]
            if line:
                lines.append(line)
    return lines


def epoch_seed() -> int:
    """whole seconds since the Unix epoch, truncated"""
    return int(time.time())


def make_rng(seed: int = None) -> random.Random:
    """construct a private pseudo-random generator, seeded from the clock by default"""
    if seed is None:
        seed = epoch_seed()
    LOG.info("seed %d", seed)
    return random.Random(seed)


def permute(seq: list, rng) -> None:
    """permute seq in place so that each ordering is equally likely

    Single forward pass: at step i the element at i swaps with a uniformly
    chosen position j in [0, i]. After step i, seq[0..i] is a uniformly
    random arrangement of the first i+1 elements. rng needs only a
    randint(a, b) method returning an integer in the closed range.
    """
    for i in range(len(seq)):
        j = rng.randint(0, i)
        seq[i], seq[j] = seq[j], seq[i]


def _write_to(outfile, lines):
    for line in lines:
        outfile.write(line + "\n")


def write_lines(path, lines, atomic: bool = False) -> None:
    """write lines to a text file, one per line, replacing prior content

    With atomic set, the lines go to a temporary file in the same directory
    which is renamed over path only after every line is written.
    """
    out_path = Path(path)
    if not atomic:
        with out_path.open(mode="w", encoding="utf-8", newline="\n") as outfile:
            _write_to(outfile, lines)
        return

    fd, tmp_name = tempfile.mkstemp(prefix="." + out_path.name + "-", dir=out_path.parent)
    try:
        with os.fdopen(fd, mode="w", encoding="utf-8", newline="\n") as outfile:
            _write_to(outfile, lines)
        os.replace(tmp_name, out_path)
    except BaseException:
        # remove the partial temporary file
        if os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise


def parse_args(argv=None) -> argparse.Namespace:
    """read options from the command line"""
    desc = "Randomly permute the non-blank lines of a text file."
    parser = argparse.ArgumentParser(prog="shuffle", description=desc)
    parser.add_argument("-i", "--input", default=DEFAULT_INPUT, metavar="PATH",
                        help="file to read lines from (default: %(default)s)")
    parser.add_argument("-o", "--output", default=DEFAULT_OUTPUT, metavar="PATH",
                        help="file to write permuted lines to (default: %(default)s)")
    parser.add_argument("-s", "--seed", type=int, default=None,
                        help="seed for the random generator (default: epoch seconds)")
    parser.add_argument("--atomic", action="store_true",
                        help="write to a temporary file and rename it into place")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="report progress on stderr")
    return parser.parse_args(argv)


def run(argv=None) -> int:
    """main function"""
    args = parse_args(argv)
    _configure_logging(args.verbose)

    # read list from file
    try:
        lines = read_lines(args.input)
    except (OSError, UnicodeDecodeError) as err:
        LOG.error("cannot read %s: %s", args.input, err)
        return 1
    LOG.info("read %d lines from %s", len(lines), args.input)

    # shuffle list and output
    permute(lines, make_rng(args.seed))
    try:
        write_lines(args.output, lines, atomic=args.atomic)
    except OSError as err:
        LOG.error("cannot write %s: %s", args.output, err)
        return 1
    LOG.info("wrote %d lines to %s", len(lines), args.output)
    return 0


def main():
    """console script entry point"""
    sys.exit(run())


if __name__ == "__main__":
    main()
