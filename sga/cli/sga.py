import sys
import argparse


def clean_command(args):
    import os
    import shutil

    targets = ["logs"] + [str(path) for path in args.paths]

    def prompt_confirm():
        warning = (
            "WARNING: This will permanently delete the following:\n"
            + "".join(f"- {t}/\n" for t in targets)
            + "\nContinue? [Y/n]: "
        )
        return input(warning).strip() == 'Y'

    if args.yes or prompt_confirm():
        for d in targets:
            if os.path.isdir(d):
                print(f"Removing {d}/ ...")
                shutil.rmtree(d, ignore_errors=True)
            elif os.path.isfile(d):
                print(f"Removing {d} ...")
                os.remove(d)
        print("Clean complete.")
    else:
        print("Clean Aborted.")
        sys.exit(1)


def main(argv=None):
    parser = argparse.ArgumentParser(
        prog="sga",
        description="SGA unified CLI: run, decode, clean"
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    # Run subcommand
    subparsers.add_parser("run", help="Run a genetic search", add_help=False)

    # Decode subcommand
    subparsers.add_parser("decode", help="Decode and evaluate a chromosome", add_help=False)

    # Clean subcommand
    clean_parser = subparsers.add_parser("clean", help="Remove logs and result directories")
    clean_parser.add_argument('paths', nargs='*', help='Result directories to remove besides logs/')
    clean_parser.add_argument('--yes', '-y', action='store_true', help='Do not ask for confirmation')

    # run and decode parse their own options from whatever is left over
    args, rest = parser.parse_known_args(argv)

    if args.command == "run":
        from .run import run_command
        run_command(rest)
    elif args.command == "decode":
        from .decode import decode_command
        decode_command(rest)
    elif args.command == "clean":
        if rest:
            parser.error(f"unrecognized arguments: {' '.join(rest)}")
        clean_command(args)
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
