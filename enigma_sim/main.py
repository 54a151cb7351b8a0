import argparse
import json
import logging
import sys
from pathlib import Path

from enigma_sim.core.config import get_settings
from enigma_sim.core.exceptions import EnigmaError
from enigma_sim.dependencies import create_machine
from enigma_sim.services.machine import EnigmaMachine, LoggingObserver
from enigma_sim.services.preprocessing import MessageNormalizer, NormalizationMode

log = logging.getLogger(__name__)


def create_parser() -> argparse.ArgumentParser:
    """Create the command line parser."""
    parser = argparse.ArgumentParser(
        prog="enigma-sim",
        description=(
            "Encrypt or decrypt a message with a three-rotor Enigma machine. "
            "The cipher is reciprocal: run the ciphertext through the same "
            "settings to get the plaintext back."
        ),
    )
    parser.add_argument("message", nargs="?", help="message text (default: read stdin)")
    parser.add_argument("--rotor-order", help="rotors left to right, e.g. I-II-III")
    parser.add_argument("--reflector", help="reflector name, e.g. B")
    parser.add_argument("--ring-setting", help="three ring setting letters, e.g. AAA")
    parser.add_argument("--indicator", help="three starting window letters, e.g. AAA")
    parser.add_argument("--plugboard", help='plugboard pairs, e.g. "AB CD EF"')
    parser.add_argument("--state", type=Path, help="flat state JSON file to load first")
    parser.add_argument("--save-state", type=Path, help="write the final state to this JSON file")
    parser.add_argument("--catalog", type=Path, help="rotor catalog JSON file")
    parser.add_argument("--group", type=int, help="ciphertext block size (0 = no grouping)")
    parser.add_argument(
        "--keep-invalid",
        action="store_true",
        help="reject characters outside the alphabet instead of dropping them",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="log every machine event")
    return parser


def configure_machine(machine: EnigmaMachine, args: argparse.Namespace) -> None:
    """Apply the state file, then the explicit settings, to machine."""
    if args.state is not None:
        state = json.loads(args.state.read_text(encoding="utf-8"))
        if not isinstance(state, dict):
            raise EnigmaError(f"State file {args.state} must contain a JSON object")
        machine.load_state(state)

    # rotor order first: it keeps the positional indicator and ring setting
    if args.rotor_order is not None:
        machine.set_rotor_order(args.rotor_order)
    if args.reflector is not None:
        machine.set_reflector(args.reflector)
    if args.ring_setting is not None:
        machine.set_ring_setting(args.ring_setting)
    if args.indicator is not None:
        machine.set_indicator(args.indicator)
    if args.plugboard is not None:
        machine.set_plugboard(args.plugboard)


def main(argv: list[str] | None = None) -> int:
    """Run the command line tool and return the exit status."""
    args = create_parser().parse_args(argv)
    settings = get_settings()
    if args.catalog is not None:
        settings = settings.model_copy(update={"catalog_path": args.catalog})

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else settings.log_level,
        format="[%(asctime)s] [%(levelname)s] [%(name)s]: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    try:
        machine = create_machine(settings)
        if args.verbose:
            machine.add_observer(LoggingObserver())
        configure_machine(machine, args)
    except EnigmaError as e:
        print(f"error: {e.message}", file=sys.stderr)
        return 2
    except (OSError, ValueError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 2

    message = args.message if args.message is not None else sys.stdin.read()
    if len(message) > settings.max_message_length:
        print(
            f"error: message exceeds maximum length of {settings.max_message_length}",
            file=sys.stderr,
        )
        return 2

    normalizer = MessageNormalizer(machine.alphabet)
    if args.keep_invalid:
        text = normalizer.strip_whitespace(normalizer.normalize(message, NormalizationMode.RAW))
    else:
        result = normalizer.normalize_full(message)
        if result.removed_chars:
            log.info("Dropped characters outside the alphabet: %s", result.removed_chars)
        text = result.text

    try:
        ciphertext = machine.encrypt_message(text)
    except EnigmaError as e:
        print(f"error: {e.message}", file=sys.stderr)
        return 2

    group_size = args.group if args.group is not None else settings.group_size
    print(normalizer.group(ciphertext, group_size))

    if args.save_state is not None:
        state = machine.save_state()
        args.save_state.write_text(json.dumps(state, indent=2) + "\n", encoding="utf-8")
        log.debug("Saved state to %s", args.save_state)

    return 0


def run() -> None:
    """Console script entry point."""
    sys.exit(main())


if __name__ == "__main__":
    run()
