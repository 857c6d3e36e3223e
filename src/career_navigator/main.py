# Copyright 2026 Justin Cook
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""
Main entry point for the Career Navigator CLI.
"""

import argparse
import asyncio
import logging
import random
import sys
from pathlib import Path
from typing import Dict, Optional

from rich.console import Console
from rich.live import Live
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel
from rich.prompt import IntPrompt, Prompt
from rich.text import Text

from career_navigator.config import NavigatorConfig
from career_navigator.controller import CareerNavigator
from career_navigator.dashboard import DashboardView, render_architecture
from career_navigator.errors import ConfigurationError
from career_navigator.ingest import github_username, ingest_github, read_resume, read_url
from career_navigator.llm_client import CareerAgentClient
from career_navigator.models import AgentLogEntry, SourceBundle
from career_navigator.session_log import SessionLog
from career_navigator.state import (
    AgeInput, Analyzing, Dashboard, DreamRole, NameInput, ProfileInput, Quiz,
    can_submit_name, can_submit_profile, can_submit_role, is_minor, parse_age,
)

logger = logging.getLogger(__name__)

MOTIVATIONAL_QUOTES = [
    "The only way to do great work is to love what you do.",
    "Your time is limited, so don't waste it living someone else's life.",
    "The future depends on what you do today.",
    "Believe you can and you're halfway there.",
    "Strive not to be a success, but rather to be of value.",
    "Success is not final, failure is not fatal: it is the courage to continue that counts.",
    "It does not matter how slowly you go as long as you do not stop.",
    "Hardships often prepare ordinary people for an extraordinary destiny.",
    "Everything you've ever wanted is on the other side of fear.",
    "Your work is going to fill a large part of your life, and the only way to be truly satisfied "
    "is to do what you believe is great work.",
]


def random_quote() -> str:
    return random.choice(MOTIVATIONAL_QUOTES)


class AgentLogPanel:
    """
    Live panel showing the last N session log entries while agents work.
    """
    def __init__(self, log: SessionLog, maxlen: int = 8):
        self.log = log
        self.maxlen = maxlen
        self.quote = random_quote()
        self.live: Optional[Live] = None

    def on_entry(self, entry: AgentLogEntry):
        if self.live:
            self.live.update(self.get_renderable())

    def get_renderable(self) -> Panel:
        text = Text()
        entries = self.log.recent(self.maxlen)
        if not entries:
            text.append("Initializing sub-agents...", style="dim italic")
        for entry in entries:
            text.append(f"[{entry.timestamp.strftime('%H:%M:%S')}] ", style="blue")
            text.append(f"[{entry.agent.upper()}] ", style="bold grey50")
            text.append(f"{entry.message}\n")
        text.append(f"\n“{self.quote}”", style="italic cyan")
        return Panel(text, title="Architecting your future...", border_style="blue")


def setup_logging(verbosity: int, quiet: bool = False, log_dir: Path = Path("user_content/logs"),
                  console: Optional[Console] = None):
    """
    Configures logging:
    - File: user_content/logs/navigator.log (DEBUG)
    - Console: Default=WARNING, -q=ERROR, -v=INFO, -vv=DEBUG
    """
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / "navigator.log"

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)

    file_handler = logging.FileHandler(log_file)
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s'))
    root.addHandler(file_handler)

    if quiet:
        level = logging.ERROR
    elif verbosity == 0:
        level = logging.WARNING
    elif verbosity == 1:
        level = logging.INFO
    else:
        level = logging.DEBUG

    console_handler = RichHandler(console=console, show_path=False, markup=False)
    console_handler.setLevel(level)
    console_handler.setFormatter(logging.Formatter('%(message)s'))
    root.addHandler(console_handler)

    # Silence some noisy libs if not in super debug
    if verbosity < 2:
        logging.getLogger("httpx").setLevel(logging.WARNING)
        logging.getLogger("httpcore").setLevel(logging.WARNING)


def _show_quote(console: Console):
    console.print(f"\n[italic cyan]“{escape(random_quote())}”[/italic cyan]\n", justify="center")


def _ask_text(console: Console, prompt: str, valid, default: Optional[str] = None) -> str:
    """Re-prompts until `valid` accepts the answer; submission stays disabled until then."""
    while True:
        value = Prompt.ask(prompt, console=console, default=default) if default else Prompt.ask(prompt, console=console)
        if valid(value):
            return value.strip()
        console.print("[yellow]Please enter a value to continue.[/yellow]")


def _ask_age(console: Console) -> int:
    while True:
        age = parse_age(Prompt.ask("How old are you?", console=console))
        if age is not None:
            return age
        console.print("[yellow]Please enter your age as a whole number.[/yellow]")


def _ask_quiz(console: Console, questions) -> Dict[int, str]:
    answers: Dict[int, str] = {}
    for idx, q in enumerate(questions):
        console.rule(f"Question {idx + 1} of {len(questions)}")
        console.print(f"[bold]{escape(q.question)}[/bold]")
        for o_idx, option in enumerate(q.options, 1):
            console.print(f"  {o_idx}. {escape(option)}")
        choice = IntPrompt.ask("Your pick", console=console,
                               choices=[str(i) for i in range(1, len(q.options) + 1)])
        answers[idx] = q.options[choice - 1]
    return answers


def _collect_sources(console: Console, config: NavigatorConfig, args) -> SourceBundle:
    """
    Gathers LinkedIn, GitHub and resume text. Unreadable sources are reported and left empty.
    """
    while True:
        linkedin = args.linkedin or Prompt.ask("LinkedIn profile text or URL (blank to skip)",
                                               console=console, default="", show_default=False)
        if linkedin.startswith("http"):
            linkedin = read_url(linkedin, verify=config.ca_bundle)
            if not linkedin:
                console.print("[red][!] Could not read that page. Paste the profile text instead.[/red]")

        github = args.github or Prompt.ask("GitHub @username, profile URL or project summary (blank to skip)",
                                           console=console, default="", show_default=False)
        username = github_username(github)
        if username:
            github = ingest_github(username, verify=config.ca_bundle)
            if not github:
                console.print("[red][!] Could not fetch GitHub repositories.[/red]")

        resume_path = args.resume or Prompt.ask("Path to resume (PDF/DOCX/TXT, blank to skip)",
                                                console=console, default="", show_default=False)
        resume = ""
        if resume_path:
            with console.status("Extracting resume text..."):
                resume = read_resume(resume_path)
            if not resume:
                console.print(f"[red][!] Could not extract text from {escape(resume_path)}.[/red]")

        sources = SourceBundle(linkedin_text=linkedin, github_info=github, resume_text=resume)
        if can_submit_profile(sources):
            return sources

        console.print("[yellow]Provide at least one source to consolidate your identity.[/yellow]")
        args.linkedin = args.github = args.resume = None


async def _analyze(console: Console, panel: AgentLogPanel, work):
    """Awaits `work` while the live panel mirrors the session log."""
    with Live(panel.get_renderable(), console=console, refresh_per_second=4) as live:
        panel.live = live
        try:
            return await work
        finally:
            panel.live = None


def _dashboard_loop(console: Console, navigator: CareerNavigator, view: DashboardView):
    while True:
        console.print(render_architecture() if navigator.state.show_architecture else view.render())
        command = Prompt.ask("Command", console=console, default="q").strip()
        if command in ("q", "quit", "exit"):
            return
        if command == "arch":
            navigator.toggle_architecture()
            continue
        feedback = view.handle(command)
        if feedback is None:
            console.print(f"[yellow]Unknown command: {escape(command)}[/yellow]")
        else:
            console.print(f"[green]{escape(feedback)}[/green]")


async def run_session(console: Console, navigator: CareerNavigator, config: NavigatorConfig, args):
    """
    Walks the user through every stage until the dashboard is closed.
    """
    panel = AgentLogPanel(navigator.log, maxlen=config.log_panel_size)
    navigator.log.listener = panel.on_entry
    console.print(Panel("[bold]Personal Career Navigator[/bold]\n[dim]Agentic Career Co-pilot[/dim]",
                        border_style="blue"))

    while True:
        match navigator.stage:
            case NameInput():
                _show_quote(console)
                name = _ask_text(console, "What shall we call you on this journey?", can_submit_name,
                                 default=args.name)
                navigator.submit_name(name)

            case AgeInput():
                _show_quote(console)
                age = parse_age(args.age) if args.age is not None else None
                if age is None:
                    age = _ask_age(console)
                args.age = None
                if is_minor(age):
                    await _analyze(console, panel, navigator.submit_age(age))
                    if isinstance(navigator.stage, AgeInput):
                        console.print("[red][!] Could not prepare your quiz. Please try again.[/red]")
                else:
                    await navigator.submit_age(age)

            case Quiz(questions=questions):
                console.print("[bold]Discovery Quiz[/bold]")
                answers = _ask_quiz(console, questions)
                await _analyze(console, panel, navigator.submit_quiz(answers))
                if isinstance(navigator.stage, AgeInput):
                    console.print("[red][!] Could not evaluate your answers. Please try again.[/red]")

            case ProfileInput():
                _show_quote(console)
                sources = _collect_sources(console, config, args)
                await _analyze(console, panel, navigator.submit_profile(sources))
                if isinstance(navigator.stage, ProfileInput):
                    console.print("[red][!] Synthesis failed. Please try again.[/red]")
                    args.linkedin = args.github = args.resume = None

            case DreamRole(profile=profile):
                console.print(f"Profile consolidated: [bold]{escape(profile.current_title)}[/bold] "
                              f"with {len(profile.skills)} skills.")
                _show_quote(console)
                role = _ask_text(console, "What is your dream role?", can_submit_role, default=args.role)
                args.role = None
                await _analyze(console, panel, navigator.submit_role(role))
                if isinstance(navigator.stage, DreamRole):
                    console.print("[red][!] Agent reasoning failed. Please try again.[/red]")

            case Dashboard(identity=identity, plan=plan, profile=profile):
                view = DashboardView(identity, plan, profile, gap_limit=config.display_gap_limit)
                _dashboard_loop(console, navigator, view)
                return

            case Analyzing():
                # Only reachable if a call was interrupted mid-flight
                logger.error("Session left in Analyzing stage; aborting.")
                return


def main():
    try:
        _main_cli()
    except KeyboardInterrupt:
        # Use stderr so it captures attention even if stdout is redirected or rich
        sys.stderr.write("\n\033[31m[-] Cancelled by user\033[0m\n")
        sys.exit(130)


def _main_cli():
    """
    Parses arguments, configures logging and runs the interactive session.
    """
    parser = argparse.ArgumentParser(description="AI Powered Career Navigator")
    parser.add_argument("--name", help="Pre-fill your name")
    parser.add_argument("--age", type=int, help="Pre-fill your age")
    parser.add_argument("--linkedin", help="LinkedIn profile text or URL")
    parser.add_argument("--github", help="GitHub @username or profile URL, or a free-text project summary")
    parser.add_argument("--resume", help="Path to a resume file (PDF, DOCX or TXT)")
    parser.add_argument("--role", help="Pre-fill your dream role")
    parser.add_argument("--provider", choices=["gemini", "openai"], help="LLM provider (default: from environment)")
    parser.add_argument("--minor-defaults", help="JSON file overriding placeholder content for under-18 plans")
    parser.add_argument("--ca-bundle", help="Path to a custom CA certificate bundle for HTTPS verification (proxy environments)")
    parser.add_argument("-v", "--verbose", action="count", default=0, help="Increase output verbosity (-v=INFO, -vv=DEBUG)")
    parser.add_argument("-q", "--quiet", action="store_true", help="Suppress status output (ERROR only)")

    args = parser.parse_args()
    console = Console()

    try:
        config = NavigatorConfig.from_env(
            ca_bundle=args.ca_bundle,
            minor_defaults_path=args.minor_defaults,
            provider=args.provider,
        )
    except ConfigurationError as e:
        console.print(f"[red]Configuration error: {escape(str(e))}[/red]")
        sys.exit(1)

    setup_logging(args.verbose, quiet=args.quiet, log_dir=config.log_dir, console=console)
    logger.info("--- Career Navigator ---")

    navigator = CareerNavigator(CareerAgentClient(config), minor_defaults=config.minor_defaults)
    asyncio.run(run_session(console, navigator, config, args))


if __name__ == "__main__":
    main()
