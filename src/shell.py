#!/usr/bin/env python3
"""Interactive command shell for the budget gap calculator.

The shell holds one calculator session. Every change to the amount, the
slider or the mode recomputes the figures and plays the eased transition
of the animated figures on a single terminal line.

Usage:
    python src/shell.py [amount] [annual|hourly]

Commands:
    amount <text>           - Enter an amount (commas allowed, blank = 0)
    mode <annual|hourly>    - Switch units, converting the amount
    slide <value>           - Set the amount from the slider range
    show                    - Print the full breakdown
    share                   - Print the share message
    items                   - Show what the excess cost could buy
    reset                   - Go back to 65,000 per year
    fields [field_name]     - Describe the computed figures
    help                    - Show help message
    exit/quit               - Exit the shell

Examples:
    > amount 82,500
    > mode hourly
    > slide 42.5
"""

import sys
import os
import cmd
import logging

import readline

# Add src directory to path for imports
sys.path.insert(0, os.path.dirname(__file__))

from model.IncomeInput import IncomeMode, RawInput
from model.field_metadata import FIELD_METADATA, get_short_name, get_description
from tax.GrowthDetails import GrowthDetails
from calc.income_normalizer import parse_amount
from animate.frame_scheduler import ManualFrameScheduler, run_blocking
from render.renderers import (
    GapSummaryRenderer,
    ShareTextRenderer,
    TickerRenderer,
    format_cents,
    format_input_display,
    format_money,
)
from gap_session import GapSession, DEFAULT_AMOUNT


logger = logging.getLogger(__name__)


class GapShell(cmd.Cmd):
    """Interactive shell around one GapSession."""

    intro = """
Budget Gap Calculator
=====================
Type 'help' for available commands.
Type 'exit' or 'quit' to exit.
"""
    prompt = '> '

    def __init__(self, raw_input: RawInput = None, details: GrowthDetails = None, animate: bool = True):
        super().__init__()
        self.details = details or GrowthDetails()
        self.animate = animate
        self.scheduler = ManualFrameScheduler()
        self.session = GapSession(self.scheduler, self.details, raw_input)
        self.ticker = TickerRenderer()

    def preloop(self):
        """Set up readline before entering the command loop."""
        try:
            readline.set_completer_delims(' \t\n')
            if 'libedit' in (readline.__doc__ or ''):
                readline.parse_and_bind("bind ^I rl_complete")
            else:
                readline.parse_and_bind("tab: complete")
        except (AttributeError, TypeError):
            pass  # readline might not be fully available

    def _play(self):
        """Run the pending transitions to completion, redrawing the ticker."""
        if self.animate:
            frames = run_blocking(self.scheduler, on_frame=lambda: self.ticker.render(self.session.display_values()))
        else:
            frames = self.scheduler.run_until_idle()
            if frames:
                self.ticker.render(self.session.display_values())
        if frames:
            self.ticker.finish()

    def _echo_input(self):
        shown = format_input_display(self.session.amount, self.session.mode) or '0'
        print(f"  Income: {shown} ({self.session.mode.value})")

    def do_amount(self, arg: str):
        """Enter an amount in the current unit.

        Usage: amount <text>

        Commas are ignored. Blank or non-numeric text counts as 0.

        Examples:
            amount 65000
            amount 82,500
        """
        self.session.enter_text(arg)
        self._echo_input()
        self._play()

    def do_mode(self, arg: str):
        """Switch between annual and hourly entry.

        Usage: mode <annual|hourly>

        The amount is converted once: hourly amounts are rounded to cents,
        annual amounts to whole dollars.
        """
        if not arg.strip():
            print(f"Current mode: {self.session.mode.value}")
            return
        try:
            mode = IncomeMode.parse(arg)
        except ValueError as e:
            print(f"Error: {e}")
            print("Usage: mode <annual|hourly>")
            return
        if mode == self.session.mode:
            print(f"Already in {mode.value} mode.")
            return
        self.session.set_mode(mode)
        self._echo_input()
        self._play()

    def do_slide(self, arg: str):
        """Set the amount from the slider.

        Usage: slide <value>

        The value is clamped to the slider range of the current mode and
        snapped to its step. Without a value, shows the range.
        """
        slider = self.details.slider_range(self.session.mode)
        if not arg.strip():
            print(f"Slider range ({self.session.mode.value}): "
                  f"{slider.minimum:g} - {slider.maximum:g}, step {slider.step:g}")
            return
        self.session.set_slider(parse_amount(arg))
        self._echo_input()
        self._play()

    def do_show(self, arg: str):
        """Print the full breakdown for the current input."""
        GapSummaryRenderer(self.details, self.session.mode).render(self.session.figures)

    def do_share(self, arg: str):
        """Print the share message for the current result."""
        ShareTextRenderer(self.details).render(self.session.figures)

    def do_items(self, arg: str):
        """Show what the yearly excess cost could buy instead."""
        print(f"\nExcess cost {format_money(self.session.figures.gap)} per year could buy:")
        for item in self.session.opportunity_equivalents():
            print(f"  {item.label + ':':<24} {item.quantity:>8,}  (@ {format_money(item.cost)}/ea)")
        print()

    def do_reset(self, arg: str):
        """Go back to the starting input of 65,000 per year."""
        self.session.reset()
        self._echo_input()
        self._play()

    def do_fields(self, arg: str):
        """Describe the computed figures.

        Usage: fields [field_name]
        """
        field_name = arg.strip()
        if field_name:
            if field_name not in FIELD_METADATA:
                print(f"Error: Unknown field '{field_name}'")
                print("Use 'fields' without arguments to see all available fields.")
                return
            value = getattr(self.session.figures, field_name)
            formatted = format_cents(value) if FIELD_METADATA[field_name].precision else format_money(value)
            print(f"\n{field_name}:")
            print(f"  Short name: {get_short_name(field_name)}")
            print(f"  Description: {get_description(field_name)}")
            print(f"  Current value: {formatted}")
            print()
            return

        print("\nComputed figures:")
        print("=" * 70)
        for name in FIELD_METADATA:
            print(f"  {name:<16} [{get_short_name(name):<14}] {get_description(name)}")
        print()

    def complete_fields(self, text, line, begidx, endidx):
        return [f for f in FIELD_METADATA if f.startswith(text)]

    def complete_mode(self, text, line, begidx, endidx):
        return [m.value for m in IncomeMode if m.value.startswith(text)]

    def do_exit(self, arg: str):
        """Exit the shell."""
        self.session.teardown()
        print("Goodbye!")
        return True

    def do_quit(self, arg: str):
        """Exit the shell."""
        return self.do_exit(arg)

    def do_EOF(self, arg: str):
        """Handle Ctrl+D to exit."""
        print()  # Print newline for clean exit
        return self.do_exit(arg)

    def emptyline(self):
        """Do nothing on empty line."""
        pass

    def default(self, line: str):
        """Handle unknown commands."""
        print(f"Unknown command: {line}")
        print("Type 'help' for available commands.")


def main():
    amount = parse_amount(sys.argv[1]) if len(sys.argv) > 1 else DEFAULT_AMOUNT
    try:
        mode = IncomeMode.parse(sys.argv[2]) if len(sys.argv) > 2 else IncomeMode.ANNUAL
    except ValueError as e:
        print(f"Error: {e}")
        sys.exit(1)

    try:
        details = GrowthDetails.from_reference()
    except FileNotFoundError:
        logger.debug("No reference file found, using built-in growth details")
        details = GrowthDetails()
    except ValueError as e:
        print(f"Error: {e}")
        sys.exit(1)

    shell = GapShell(RawInput(amount, mode), details)
    shell.cmdloop()


if __name__ == "__main__":
    main()
