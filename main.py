#  regpull main CLI: list tags or pull an image's blobs
#  Every failure ends up here as a single "[!] Failed to ..." line
import sys

from regpull.modules.cli import parse_args
from regpull.modules.auth import RegistryTransport
from regpull.modules.errors import RegpullError
from regpull.modules.keepers import pull, list_image_tags, Tee, end_line


def run(args):
    with RegistryTransport(timeout=args.timeout) as transport:
        if args.command == "list":
            tags = list_image_tags(args.repo, transport)
            print("Tags:")
            for tag in tags:
                print(f"  {tag}")
            return

        result = pull(args.repo, transport, images_dir=args.images_dir)
        print(f"[+] Saved {result.reference} to {result.directory}")


def main(argv=None):
    args = parse_args(argv)

    # set up logging/tee if requested
    log_f = None
    old_stdout, old_stderr = sys.stdout, sys.stderr
    if args.log_file:
        try:
            log_f = open(args.log_file, "w", encoding="utf-8")
        except OSError as e:
            print(f"[!] Failed to open log file {args.log_file}: {e}", file=sys.stderr)
            return 1
        sys.stdout = Tee(old_stdout, log_f)
        sys.stderr = Tee(old_stderr, log_f)

    try:
        run(args)
    except RegpullError as e:
        end_line()
        print(f"[!] Failed to {args.command}: {e}", file=sys.stderr)
        return 1
    finally:
        if log_f:
            sys.stdout, sys.stderr = old_stdout, old_stderr
            log_f.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())
