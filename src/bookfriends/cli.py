import argparse
import logging
import sys
from datetime import date

from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.prompt import Confirm, FloatPrompt, IntPrompt, Prompt
from rich.table import Table

from .config import load_settings
from .images import to_data_uri
from .journal import REVIEW_MAX_CHARS, Journal
from .models import BookRecord, Genre, RecordDraft
from .shelf import calendar_days, month_summary, shelf
from .storage import FileBackend, JsonStore

console = Console()


def print_header(journal: Journal):
    session = journal.sessions.get_active()
    subtitle = f"{session.group.name} · #{session.group.code}" if session else "no group yet"
    console.print(Panel.fit(
        f"""[bold magenta]BookFriends[/bold magenta]
[italic]{subtitle}[/italic]""",
        border_style="magenta"
    ))


def stars(rating: float) -> str:
    full = int(rating)
    half = "½" if rating - full >= 0.5 else ""
    return "★" * full + half or "-"


def records_table(records, title: str) -> Table:
    table = Table(title=title)
    table.add_column("ID", style="dim", no_wrap=True)
    table.add_column("Date")
    table.add_column("Title", style="bold")
    table.add_column("Writer")
    table.add_column("Genre")
    table.add_column("By")
    table.add_column("Rating")
    for r in records:
        table.add_row(r.id[:8], r.record_date, r.title, r.writer, r.genre, r.author_name, stars(r.rating))
    return table


def show_record(record: BookRecord):
    console.print(Panel(
        f"""[bold]{record.title}[/bold] · {record.writer or '?'} ({record.publisher or '?'})
{record.genre} · {record.pages} pages · {record.start_date or '?'} → {record.end_date or '?'}
{stars(record.rating)}

{record.review}""",
        title=f"{record.author_name} · {record.record_date}",
        subtitle=record.id,
    ))


def cmd_create_group(journal: Journal, args):
    name = Prompt.ask("Group name")
    leader = Prompt.ask("Leader name")
    max_members = IntPrompt.ask("Max members", default=5)
    description = Prompt.ask("Description", default="")
    password = Prompt.ask("Group password", password=True)
    group = journal.create_group(name, leader, password, max_members=max_members, description=description)
    console.print(f"[green]Group created.[/green] Share the code [bold]{group.code}[/bold] with your members.")
    if Confirm.ask("Join it now?", default=True):
        args.code = group.code
        cmd_join(journal, args)


def cmd_join(journal: Journal, args):
    code = args.code or Prompt.ask("Group code")
    group = journal.groups.find_by_code(code)
    if group is not None:
        console.print(Panel.fit(f"[bold]{group.name}[/bold]\nLeader: {group.leader_name}\n{group.description}"))
    name = Prompt.ask("Your name")
    password = Prompt.ask("Password", password=True)
    image_path = Prompt.ask("Profile image file (optional)", default="")
    profile_image = to_data_uri(image_path) if image_path else ""
    session = journal.join(code, name, password, profile_image=profile_image)
    console.print(f"[green]Welcome to {session.group.name}, {session.user.name}![/green]")


def cmd_whoami(journal: Journal, args):
    session = journal.current()
    console.print(f"{session.user.name} in [bold]{session.group.name}[/bold] (#{session.group.code})")


def cmd_groups(journal: Journal, args):
    active = journal.sessions.get_active()
    table = Table(title="Joined groups")
    table.add_column("")
    table.add_column("Code")
    table.add_column("Group")
    table.add_column("As")
    for s in journal.joined():
        marker = "●" if active and active.group.code == s.group.code else ""
        table.add_row(marker, s.group.code, s.group.name, s.user.name)
    console.print(table)


def cmd_switch(journal: Journal, args):
    session = journal.switch(args.code)
    console.print(f"[green]Now in {session.group.name} as {session.user.name}[/green]")


def ask_form(form: RecordDraft) -> RecordDraft:
    title = Prompt.ask("Title", default=form.title or "")
    author_name = Prompt.ask("Your name", default=form.author_name or "")
    writer = Prompt.ask("Writer", default=form.writer or "")
    publisher = Prompt.ask("Publisher", default=form.publisher or "")
    genre = Prompt.ask("Genre", choices=[g.value for g in Genre], default=form.genre or Genre.NOVEL.value)
    pages = IntPrompt.ask("Pages", default=form.pages or 0)
    start_date = Prompt.ask("Started (YYYY-MM-DD)", default=form.start_date or "")
    end_date = Prompt.ask("Finished (YYYY-MM-DD)", default=form.end_date or "")
    record_date = Prompt.ask("Journal date", default=form.record_date or date.today().isoformat())
    cover_path = Prompt.ask("Cover image file" + (" (enter keeps the current one)" if form.cover_image else ""), default="")
    rating = FloatPrompt.ask("Rating (0-5, half steps)", default=form.rating or 0.0)
    review = Prompt.ask(f"Review (max {REVIEW_MAX_CHARS} chars)", default=form.review or "")

    return form.merged(RecordDraft(
        title=title,
        author_name=author_name,
        writer=writer,
        publisher=publisher,
        genre=genre,
        pages=pages,
        start_date=start_date,
        end_date=end_date,
        record_date=record_date,
        cover_image=to_data_uri(cover_path) if cover_path else None,
        rating=rating,
        review=review,
    ))


def cmd_record(journal: Journal, args):
    form = ask_form(journal.start_record())
    if Confirm.ask("Submit now? (no saves it as a draft)", default=True):
        record = journal.submit(form)
        console.print(f"[green]Recorded![/green] [dim]{record.id}[/dim]")
    else:
        journal.save_draft(form)
        console.print("[yellow]Draft saved.[/yellow]")


def cmd_draft(journal: Journal, args):
    if args.action == "clear":
        journal.drafts.clear()
        console.print("[dim]Draft cleared.[/dim]")
        return
    draft = journal.drafts.get()
    if draft is None:
        console.print("[dim]No draft saved.[/dim]")
        return
    for key, value in draft.filled().items():
        if key == "cover_image":
            value = f"<{len(value)} chars>"
        console.print(f"[bold]{key}[/bold]: {value}")


def cmd_list(journal: Journal, args):
    console.print(records_table(journal.group_records(), f"{journal.current().group.name} records"))


def cmd_mine(journal: Journal, args):
    records = journal.my_records()
    console.print(records_table(records, f"{journal.current().user.name}'s records ({len(records)}) across {len(journal.joined())} groups"))


def cmd_shelf(journal: Journal, args):
    table = Table(title="Shelf")
    table.add_column("Title", style="bold")
    table.add_column("Readers")
    table.add_column("Rating")
    for spine in shelf(journal.records.list_by_group(journal.current().group.code)):
        table.add_row(spine.title, ", ".join(r.author_name for r in spine.records), stars(spine.cover.rating))
    console.print(table)


def cmd_calendar(journal: Journal, args):
    year, month = (int(p) for p in args.month.split("-")) if args.month else (date.today().year, date.today().month)
    records = journal.records.list_by_group(journal.current().group.code)
    days = calendar_days(records, year, month)
    summary = month_summary(records, year, month)
    table = Table(title=f"{summary['month']}")
    table.add_column("Day")
    table.add_column("Records")
    for day, found in days.items():
        table.add_row(str(day), "; ".join(f"{r.title} ({r.author_name})" for r in found))
    console.print(table)
    console.print(f"This month: [bold]{summary['this_month']}[/bold] books · total: [bold]{summary['total']}[/bold] records")


def cmd_delete(journal: Journal, args):
    matches = [r for r in journal.records.list_all() if r.id.startswith(args.id)]
    if len(matches) != 1:
        console.print(f"[yellow]{len(matches)} records match {args.id!r}[/yellow]")
        return
    show_record(matches[0])
    if Confirm.ask("Delete this record?", default=False):
        journal.delete_record(matches[0].id)
        console.print("[green]Deleted.[/green]")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="bookfriends", description="Book club reading journal")
    sub = parser.add_subparsers(dest="command", required=True)
    sub.add_parser("create-group", help="create a reading group").set_defaults(func=cmd_create_group, code=None)
    join = sub.add_parser("join", help="join a group by its code")
    join.add_argument("code", nargs="?")
    join.set_defaults(func=cmd_join)
    sub.add_parser("whoami", help="show the active membership").set_defaults(func=cmd_whoami)
    sub.add_parser("groups", help="list joined groups").set_defaults(func=cmd_groups)
    switch = sub.add_parser("switch", help="switch to a joined group")
    switch.add_argument("code")
    switch.set_defaults(func=cmd_switch)
    sub.add_parser("record", help="journal a finished book").set_defaults(func=cmd_record)
    draft = sub.add_parser("draft", help="show or clear the saved draft")
    draft.add_argument("action", choices=["show", "clear"], nargs="?", default="show")
    draft.set_defaults(func=cmd_draft)
    sub.add_parser("list", help="records of the active group").set_defaults(func=cmd_list)
    sub.add_parser("mine", help="your records across groups").set_defaults(func=cmd_mine)
    sub.add_parser("shelf", help="the group's shelf").set_defaults(func=cmd_shelf)
    cal = sub.add_parser("calendar", help="records per day for a month")
    cal.add_argument("month", nargs="?", help="YYYY-MM, defaults to this month")
    cal.set_defaults(func=cmd_calendar)
    delete = sub.add_parser("delete", help="delete one of your records")
    delete.add_argument("id", help="record id or its prefix")
    delete.set_defaults(func=cmd_delete)
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)
    try:
        settings = load_settings()
        logging.basicConfig(
            level=settings.log_level,
            format="%(message)s",
            handlers=[RichHandler(console=console, show_path=False)],
        )
        journal = Journal(JsonStore(FileBackend(settings.home)), code_attempts=settings.code_attempts)
        print_header(journal)
        args.func(journal, args)
    except Exception as e:
        cause = e.__cause__ or e
        console.print(f"[bold red]Error:[/bold red] {e}")
        if cause is not e:
            console.print(f"[red]Caused by:[/red] {cause}")
        sys.exit(1)

if __name__ == "__main__":
    main()
