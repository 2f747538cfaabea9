"""Interactive CLI application."""
import logging

from rich.console import Console
from rich.panel import Panel
from rich.prompt import IntPrompt, Prompt
from rich.table import Table

from study_tracker import config
from study_tracker.confidence import CONFIDENCE_SCALE, get_confidence
from study_tracker.dashboard import (
    get_score_color, get_score_label, get_tracker_stats, most_improved, needing_attention,
)
from study_tracker.errors import TrackerError
from study_tracker.importer import import_file
from study_tracker.logging_config import init_logging
from study_tracker.models import STEP_FLAGS, STEP_LABELS, TopicRecord
from study_tracker.review import (
    SORT_OPTIONS, breakdown_by_confidence, classify_record, counts_by_urgency, filter_records,
    needs_review, rollup_by_subject, sort_records,
)
from study_tracker.scores import mean
from study_tracker.seed import is_seeded, seed_all
from study_tracker.store import DebouncedSaver, SqliteRecordStore, load_working_set
from study_tracker.tracker import (
    add_record, add_score, clear_scores, delete_record, log_practice_session, mark_studied,
    set_confidence, toggle_step,
)
from study_tracker.urgency import CRITICAL, URGENCY_COLORS, URGENCY_LABELS, days_since

logger = logging.getLogger(__name__)

console = Console()

EXIT_WORDS = ("q", "menu")


class SessionExitRequested(Exception):
    """Raised when the user backs out of a prompt."""


def session_prompt(prompt: str, **kwargs) -> str:
    answer = Prompt.ask(prompt, console=console, **kwargs)
    if answer is not None and answer.strip().lower() in EXIT_WORDS:
        raise SessionExitRequested()
    return answer


class SessionIntPrompt(IntPrompt):
    """Integer prompt that also accepts the exit words."""

    def process_response(self, value: str) -> int:
        if value.strip().lower() in EXIT_WORDS:
            raise SessionExitRequested()
        return super().process_response(value)


def session_int_prompt(prompt: str, **kwargs) -> int:
    return SessionIntPrompt.ask(prompt, console=console, **kwargs)


def show_welcome():
    console.print(Panel(
        "[bold]Study Tracker[/bold]\n[dim]Know what to review today[/dim]",
        title="Welcome", border_style="blue",
    ))


def show_menu():
    console.print("\n[bold]Commands:[/bold]")
    commands = [
        ("list", "All topics"),
        ("review", "Topics to review now"),
        ("add", "Track a new topic"),
        ("step", "Check off a study step"),
        ("score", "Record a quiz score"),
        ("confidence", "Rate your confidence"),
        ("studied", "Mark a topic studied today"),
        ("practice", "Log a practice session"),
        ("analytics", "Scores and progress"),
        ("import", "Import records from a file"),
        ("delete", "Remove a topic"),
        ("quit", "Exit"),
    ]
    for cmd, desc in commands:
        console.print(f"  [cyan]{cmd:<14}[/cyan] {desc}")


def _urgency_cell(urgency: str) -> str:
    label = URGENCY_LABELS[urgency]
    return f"[{URGENCY_COLORS[urgency]}]{label}[/{URGENCY_COLORS[urgency]}]" if label else ""


def _score_cell(scores) -> str:
    avg = mean(scores)
    if avg is None:
        return "[dim]—[/dim]"
    color = get_score_color(avg)
    return f"[{color}]{avg}%[/{color}] ({len(scores)})"


def render_records_table(records, title: str = "Topics", now=None) -> Table:
    table = Table(title=title)
    table.add_column("#", justify="right")
    table.add_column("Block")
    table.add_column("Subject", style="cyan")
    table.add_column("Topic")
    table.add_column("Days Ago", justify="right")
    table.add_column("Steps")
    table.add_column("Confidence")
    table.add_column("Score", justify="right")
    table.add_column("Urgency")
    for i, r in enumerate(records, 1):
        days = days_since(r.last_studied, now)
        steps = "".join("✓" if getattr(r, s) else "·" for s in STEP_FLAGS)
        if r.confidence:
            conf = get_confidence(r.confidence)
            conf_cell = f"[{conf.color}]{conf.label}[/{conf.color}]"
        else:
            conf_cell = "[dim]unrated[/dim]"
        table.add_row(
            str(i), r.block, r.subject, r.topic,
            "—" if days is None else str(days),
            steps, conf_cell, _score_cell(r.scores),
            _urgency_cell(classify_record(r, now)),
        )
    return table


def pick_record(records) -> TopicRecord:
    if not records:
        raise TrackerError("No topics tracked yet. Use 'add' first.")
    console.print(render_records_table(records))
    index = session_int_prompt("Topic #", choices=[str(i) for i in range(1, len(records) + 1)])
    return records[index - 1]


def cmd_list(records):
    sort_by = session_prompt("Sort by", choices=list(SORT_OPTIONS), default="block")
    search = session_prompt("Search (blank for all)", default="")
    visible = filter_records(records, search=search or None)
    console.print(render_records_table(sort_records(visible, by=sort_by)))
    return records


def cmd_review(records):
    queue = needs_review(records)
    if not queue:
        console.print("[green]Nothing needs review right now. Keep it up![/green]")
        return records
    console.print(render_records_table(queue, title="Review Now"))
    return records


def cmd_add(records):
    console.print("\n[bold]Track a New Topic[/bold]")
    record = TopicRecord(
        block=session_prompt("Block", default=""),
        subject=session_prompt("Subject", default=""),
        topic=session_prompt("Topic / lecture title"),
        lecture_date=session_prompt("Lecture date (YYYY-MM-DD)", default="") or None,
        lecture_id=session_prompt("Lecture id (optional)", default="") or None,
    )
    records = add_record(records, record)
    console.print(f"[green]Added {record.topic}.[/green]")
    return records


def cmd_step(records):
    record = pick_record(records)
    for i, step in enumerate(STEP_FLAGS, 1):
        mark = "✓" if getattr(record, step) else " "
        console.print(f"  [cyan]{i}[/cyan]) [{mark}] {STEP_LABELS[step]}")
    index = session_int_prompt("Step", choices=[str(i) for i in range(1, len(STEP_FLAGS) + 1)])
    step = STEP_FLAGS[index - 1]
    records = toggle_step(records, record.id, step)
    console.print(f"[green]{STEP_LABELS[step]} updated.[/green]")
    return records


def cmd_score(records):
    record = pick_record(records)
    raw = session_prompt("Score (0-100, or 'clear')")
    if raw.strip().lower() == "clear":
        return clear_scores(records, record.id)
    records = add_score(records, record.id, raw)
    console.print("[green]Score saved.[/green]")
    return records


def cmd_confidence(records):
    record = pick_record(records)
    for c in CONFIDENCE_SCALE:
        console.print(f"  [{c.color}]{c.level}[/{c.color}]) {c.label}, review every {c.review_interval_days}d")
    level = session_int_prompt("Confidence", choices=[str(c.level) for c in CONFIDENCE_SCALE])
    return set_confidence(records, record.id, level)


def cmd_studied(records):
    record = pick_record(records)
    records = mark_studied(records, record.id)
    console.print(f"[green]Marked {record.topic} studied today.[/green]")
    return records


def cmd_practice(records):
    console.print("\n[bold]Log Practice Session[/bold]")
    block = session_prompt("Block", default="")
    subject = session_prompt("Subject", default="")
    topic = session_prompt("Topic")
    total = session_int_prompt("Questions attempted")
    correct = session_int_prompt("Questions correct")
    if total < 0 or not 0 <= correct <= max(total, 0):
        raise TrackerError("Correct answers must be between 0 and the number attempted.")
    return log_practice_session(records, block, subject, topic, correct, total)


def cmd_analytics(records):
    stats = get_tracker_stats(records)
    overall = stats["overall_score"]
    color = get_score_color(overall)
    overall_text = "—" if overall is None else f"{overall}%"
    console.print(Panel(
        f"Overall Score: [{color}]{overall_text}[/{color}]  |  "
        f"Topics: [bold]{stats['topics_tracked']}[/bold]  |  "
        f"Review Now: [bold red]{stats['needs_review']}[/bold red]  |  "
        f"Fully Complete: [bold green]{stats['fully_complete']}[/bold green]\n"
        f"Practice Sessions: [bold]{stats['total_sessions']}[/bold]"
        + (f"  |  Most Practiced: [cyan]{stats['most_practiced_subject']}[/cyan]"
           if stats["total_sessions"] else ""),
        title="Analytics", border_style="blue",
    ))

    table = Table(title="Subjects (weakest first)")
    table.add_column("Subject", style="cyan")
    table.add_column("Topics", justify="right")
    table.add_column("Avg Score", justify="right")
    table.add_column("Avg Confidence", justify="right")
    table.add_column("Status")
    for s in rollup_by_subject(records):
        sc_color = get_score_color(s["mean_score"])
        table.add_row(
            s["subject"] or "—", str(s["count"]),
            "—" if s["mean_score"] is None else f"{s['mean_score']}%",
            "—" if s["mean_confidence"] is None else str(s["mean_confidence"]),
            f"[{sc_color}]{get_score_label(s['mean_score'])}[/{sc_color}]",
        )
    console.print(table)

    table = Table(title="Confidence Breakdown")
    table.add_column("Level")
    table.add_column("Topics", justify="right")
    table.add_column("Avg Score", justify="right")
    for c in breakdown_by_confidence(records):
        table.add_row(
            f"{c['level']} {c['label']}", str(c["count"]),
            "—" if c["mean_score"] is None else f"{c['mean_score']}%",
        )
    console.print(table)

    improved = most_improved(records)
    if improved:
        console.print(f"\n  [green]Most improved: {improved['record'].topic} (+{improved['diff']})[/green]")
    for r in needing_attention(records):
        console.print(f"  [red]Struggling: {r.topic} (last two scores {r.scores[-2]}, {r.scores[-1]})[/red]")
    return records


def cmd_import(records):
    file_path = session_prompt("File path")
    result = import_file(records, file_path)
    console.print(
        f"[green]Imported {result['imported']} records from {result['filename']} "
        f"({result['added']} new topics)[/green]"
    )
    return result["records"]


def cmd_delete(records):
    record = pick_record(records)
    if session_prompt(f"Delete {record.topic}?", choices=["y", "n"], default="n") != "y":
        return records
    return delete_record(records, record.id)


COMMANDS = {
    "list": cmd_list,
    "review": cmd_review,
    "add": cmd_add,
    "step": cmd_step,
    "score": cmd_score,
    "confidence": cmd_confidence,
    "studied": cmd_studied,
    "practice": cmd_practice,
    "analytics": cmd_analytics,
    "import": cmd_import,
    "delete": cmd_delete,
}


def run_command(choice: str, records, saver: DebouncedSaver):
    """Run one menu command and schedule a save if it changed the records."""
    updated = COMMANDS[choice](records)
    if updated is not records:
        saver.schedule(updated)
    return updated


def main():
    init_logging()
    store = SqliteRecordStore(config.DEFAULT_DB_PATH)
    first_run = not is_seeded(store)
    if first_run:
        console.print("[dim]Setting up for first use...[/dim]")
    seed_all(store)
    records = load_working_set(store)
    saver = DebouncedSaver(store)

    show_welcome()
    counts = counts_by_urgency(records)
    logger.debug("Loaded %d records (%s)", len(records), ", ".join(f"{u}: {n}" for u, n in counts.items()))
    if counts[CRITICAL]:
        console.print(f"[bold red]{counts[CRITICAL]} topic(s) need review now.[/bold red]")

    try:
        while True:
            show_menu()
            choice = Prompt.ask("\n[bold]>[/bold]", default="review").strip().lower()
            try:
                if choice in ("quit", "exit", "q"):
                    console.print("[dim]Happy studying![/dim]")
                    break
                elif choice in COMMANDS:
                    records = run_command(choice, records, saver)
                else:
                    console.print("[red]Unknown command. Try again.[/red]")
            except SessionExitRequested:
                console.print("[dim]Back to menu.[/dim]")
            except KeyboardInterrupt:
                console.print("\n[dim]Use 'quit' to exit.[/dim]")
            except (TrackerError, ValueError, OSError) as e:
                console.print(f"[red]Error: {e}[/red]")
    finally:
        saver.flush()


if __name__ == "__main__":
    main()
