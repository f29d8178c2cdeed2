"""
CLI for Seisen.

Minimal CLI using stdlib for fast startup.
Subcommands are imported lazily to avoid startup overhead.

Usage:
    seisen                          # Show a random note
    seisen add "your note here"     # Add a note
    seisen session                  # Interactive session
    seisen --help                   # Show help
"""

import sys


def print_help() -> None:
    """Print help message."""
    print("""seisen - a random note from the sensei

Usage:
    seisen [--category C]         Show a random note

Commands:
    seisen show [category]        Show a random note from a category
    seisen add [-c C] <text>      Add a note (default category if no -c)
    seisen categories             List categories and note counts
    seisen where                  Show the notes folder
    seisen notify [category]      Send one notification now
    seisen watch [options]        Send a notification every interval (-i SECONDS, -c C)
    seisen session [--no-notify]  Interactive session (new note, categories, theme)
    seisen health                 Check notes folder and notifications

Options:
    seisen --help, -h             Show this help
    seisen --version, -v          Show version

Categories:
    sensei_notes, samurai, zen, 42, life, custom

Examples:
    seisen
    seisen show zen
    seisen add -c life "Bois de l'eau."
    echo "Respire." | seisen add -c zen
    seisen watch --interval 1800""")


def print_version() -> None:
    """Print version."""
    from seisen import __version__
    print(f"seisen {__version__}")


def setup_logging(level: str = "WARNING") -> None:
    """Configure root logging."""
    import logging

    logging.basicConfig(
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        level=getattr(logging, level.upper(), logging.WARNING),
    )


def parse_options(args: list[str], with_value: dict[str, str]) -> tuple[dict[str, str], list[str]]:
    """
    Split options from positional arguments.

    with_value maps each flag (e.g. "--category", "-c") to its option name.
    """
    options: dict[str, str] = {}
    rest: list[str] = []

    i = 0
    while i < len(args):
        arg = args[i]
        if arg in with_value:
            if i + 1 >= len(args):
                raise ValueError(f"Missing value for {arg}")
            options[with_value[arg]] = args[i + 1]
            i += 2
        else:
            rest.append(arg)
            i += 1

    return options, rest


CATEGORY_FLAGS = {"--category": "category", "-c": "category"}


def build_session(settings=None):
    """
    Wire the notes folder, selector and session together.

    Returns (controller, store, settings).
    """
    from seisen.config import get_seisen_home, load_settings
    from seisen.selector import LocalNoteProvider
    from seisen.session import SessionController
    from seisen.store import NoteStore

    settings = settings or load_settings()
    store = NoteStore(get_seisen_home(settings))
    controller = SessionController(
        LocalNoteProvider(store),
        default_category=settings.notes.default_category,
    )
    return controller, store, settings


def open_session(category: str | None = None):
    """Build and initialize a session, switching category if asked."""
    import logging

    controller, store, settings = build_session()
    controller.initialize()
    logging.getLogger(__name__).info("Notes folder: %s", store.home)
    if category:
        controller.change_category(category)
    return controller, store, settings


def cmd_show(args: list[str]) -> int:
    """Show one random note."""
    from seisen.errors import SeisenError
    from seisen.render import format_note

    setup_logging()
    try:
        options, rest = parse_options(args, CATEGORY_FLAGS)
        category = options.get("category") or (rest[0] if rest else None)
        controller, _, _ = open_session(category)
        print(format_note(controller.current_note))
        return 0
    except (SeisenError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


def capture(text: str, category: str | None = None) -> int:
    """Add text as a note to category (default category if None)."""
    from seisen.categories import display_name
    from seisen.errors import SeisenError

    if not text.strip():
        print("Error: Empty note", file=sys.stderr)
        return 1

    try:
        controller, _, _ = open_session(category)
        controller.set_draft(text)
        if not controller.add_note():
            print("Error: Note not saved (see log)", file=sys.stderr)
            return 1

        category = controller.state.category
        print(f"Added to {display_name(category)} ({len(controller.state.notes)} notes)")
        return 0
    except (SeisenError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


def cmd_add(args: list[str]) -> int:
    """Add a note from arguments or piped stdin."""
    setup_logging()
    try:
        options, rest = parse_options(args, CATEGORY_FLAGS)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    text = " ".join(rest)
    if not text.strip() and not sys.stdin.isatty():
        # Reading from pipe
        text = sys.stdin.read()

    return capture(text, options.get("category"))


def cmd_categories() -> int:
    """List categories with note counts."""
    from seisen.categories import CATEGORIES, display_name
    from seisen.errors import SeisenError, StorageUnavailable

    setup_logging()
    try:
        _, store, _ = build_session()
        store.ensure_defaults()
    except (SeisenError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(f"{'CATEGORY':14}  {'NAME':8}  NOTES")
    print("─" * 32)
    for category in CATEGORIES:
        try:
            count = str(store.count(category))
        except StorageUnavailable:
            count = "?"
        print(f"{category:14}  {display_name(category):8}  {count}")
    return 0


def cmd_where() -> int:
    """Print the notes folder."""
    from seisen.config import get_seisen_home

    try:
        print(get_seisen_home())
        return 0
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


def cmd_notify(args: list[str]) -> int:
    """Send the current note as a notification, once."""
    from seisen.errors import SeisenError
    from seisen.notify import build_notifier
    from seisen.scheduler import NotificationScheduler

    setup_logging()
    try:
        options, rest = parse_options(args, CATEGORY_FLAGS)
        category = options.get("category") or (rest[0] if rest else None)
        controller, _, settings = open_session(category)
        scheduler = NotificationScheduler(
            build_notifier(settings),
            title=settings.notifications.title,
        )
    except (SeisenError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if not scheduler.fire(lambda: controller.current_note):
        print("Error: Notification not delivered (see log)", file=sys.stderr)
        return 1
    print(controller.current_note)
    return 0


def cmd_watch(args: list[str]) -> int:
    """Send a notification every interval until interrupted."""
    import threading

    from seisen.errors import SeisenError
    from seisen.notify import build_notifier
    from seisen.scheduler import NotificationScheduler

    try:
        options, _ = parse_options(
            args, {**CATEGORY_FLAGS, "--interval": "interval", "-i": "interval"}
        )
        controller, _, settings = build_session()
        setup_logging(settings.logging.level)

        controller.initialize()
        if category := options.get("category"):
            controller.change_category(category)

        interval = float(options.get("interval", settings.notifications.interval_seconds))
        scheduler = NotificationScheduler(
            build_notifier(settings),
            title=settings.notifications.title,
        )
    except (SeisenError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    try:
        with scheduler:
            scheduler.start(interval, lambda: controller.current_note)
            print(f"Watching. Current note: {controller.current_note}")
            threading.Event().wait()
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        print("\nStopped.")
    return 0


SESSION_HELP = """Commands:
    <enter>, n        New note
    c <category|1-6>  Change category
    a <text>          Add a note to the current category
    t                 Toggle theme
    ?                 Help
    q                 Quit"""


def run_session_command(controller, line: str) -> bool:
    """
    Apply one interactive command to the session.

    Returns False when the user asked to quit.
    """
    from seisen.categories import CATEGORIES
    from seisen.errors import UnknownCategory

    command, _, arg = line.strip().partition(" ")
    arg = arg.strip()

    if command in ("q", "quit", "exit"):
        return False

    if command in ("", "n", "new"):
        controller.request_new_note()
    elif command in ("c", "cat", "category"):
        if arg.isdigit() and 1 <= int(arg) <= len(CATEGORIES):
            arg = CATEGORIES[int(arg) - 1]
        try:
            controller.change_category(arg)
        except UnknownCategory as e:
            print(f"Error: {e}", file=sys.stderr)
    elif command in ("a", "add"):
        controller.set_draft(arg)
        if arg and not controller.add_note():
            print("Error: Note not saved (see log)", file=sys.stderr)
    elif command in ("t", "theme"):
        controller.toggle_theme()
    elif command in ("?", "h", "help"):
        print(SESSION_HELP)
    else:
        print(f"Unknown command: {command} (? for help)", file=sys.stderr)

    return True


def cmd_session(args: list[str]) -> int:
    """Interactive session with periodic notifications in the background."""
    from seisen.errors import SeisenError
    from seisen.notify import build_notifier
    from seisen.render import render_state
    from seisen.scheduler import NotificationScheduler

    notifications = "--no-notify" not in args

    try:
        controller, _, settings = build_session()
        setup_logging(settings.logging.level)
        controller.initialize()
        scheduler = NotificationScheduler(
            build_notifier(settings),
            title=settings.notifications.title,
        )
    except (SeisenError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    # Re-render once per command, however many state changes it caused
    changed = [True]
    unsubscribe = controller.subscribe(lambda state: changed.__setitem__(0, True))

    try:
        with scheduler:
            if notifications:
                scheduler.start(
                    settings.notifications.interval_seconds,
                    lambda: controller.current_note,
                )
            print(SESSION_HELP)
            while True:
                if changed[0]:
                    print()
                    print(render_state(controller.state))
                    changed[0] = False
                try:
                    line = input("> ")
                except EOFError:
                    break
                if not run_session_command(controller, line):
                    break
    except KeyboardInterrupt:
        print()
    finally:
        unsubscribe()

    return 0


def cmd_health() -> int:
    """Show health report."""
    from seisen.health import format_health_report, run_health_check

    try:
        _, store, settings = build_session()
        print(format_health_report(run_health_check(store, settings)))
        return 0
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


def main() -> int:
    """Main entry point."""
    args = sys.argv[1:]

    # No args - non-empty piped input is a note to add, otherwise show one
    if not args:
        if not sys.stdin.isatty():
            # Reading from pipe
            text = sys.stdin.read().strip()
            if text:
                setup_logging()
                return capture(text)
        return cmd_show([])

    first_arg = args[0]

    if first_arg in ("--help", "-h", "help"):
        print_help()
        return 0

    if first_arg in ("--version", "-v", "version"):
        print_version()
        return 0

    if first_arg in CATEGORY_FLAGS:
        return cmd_show(args)

    # Subcommands (lazy import to keep startup fast)
    if first_arg == "show":
        return cmd_show(args[1:])

    if first_arg == "add":
        return cmd_add(args[1:])

    if first_arg == "categories":
        return cmd_categories()

    if first_arg == "where":
        return cmd_where()

    if first_arg == "notify":
        return cmd_notify(args[1:])

    if first_arg == "watch":
        return cmd_watch(args[1:])

    if first_arg == "session":
        return cmd_session(args[1:])

    if first_arg == "health":
        return cmd_health()

    print(f"Unknown command: {first_arg}", file=sys.stderr)
    print_help()
    return 1


if __name__ == "__main__":
    sys.exit(main())
