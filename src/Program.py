import sys
import logging
import argparse
from model.IncomeInput import IncomeMode, RawInput
from tax.GrowthDetails import GrowthDetails
from calc.income_normalizer import parse_amount
from calc.gap_calculator import GapCalculator
from animate.frame_scheduler import ManualFrameScheduler, run_blocking
from animate.smooth_value import SmoothCounter
from model.field_metadata import ANIMATED_FIELDS
from render.renderers import RENDERER_REGISTRY, TickerRenderer
from gap_session import DEFAULT_AMOUNT


def load_details(reference_path: str = None) -> GrowthDetails:
    """Load growth details from the reference file, falling back to built-in values."""
    try:
        return GrowthDetails.from_reference(reference_path)
    except FileNotFoundError:
        if reference_path:
            raise
        logging.getLogger(__name__).debug("No reference file found, using built-in growth details")
        return GrowthDetails()


def play_from_zero(figures, details: GrowthDetails, fps: float = 60.0) -> None:
    """Ease every animated figure up from 0 on one terminal line."""
    scheduler = ManualFrameScheduler()
    ticker = TickerRenderer()
    counters = {name: SmoothCounter(scheduler, 0, details.animation_duration_ms) for name in ANIMATED_FIELDS}
    for name, counter in counters.items():
        counter.set_target(getattr(figures, name))
    run_blocking(scheduler, on_frame=lambda: ticker.render({n: c.display_value for n, c in counters.items()}), fps=fps)
    ticker.finish()
    for counter in counters.values():
        counter.teardown()


def main(argv=None):
    parser = argparse.ArgumentParser(
        description='Budget gap calculator',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Render modes:
  summary   Print the full breakdown (default)
  share     Print the share message

Examples:
  python src/Program.py 65000
  python src/Program.py 31.25 --mode hourly
  python src/Program.py "82,500" --render share
  python src/Program.py 65000 --animate
        """
    )
    parser.add_argument('amount', nargs='?', default=str(DEFAULT_AMOUNT),
                        help='Income in the selected unit (commas allowed)')
    parser.add_argument('--mode', '-m',
                        choices=[m.value for m in IncomeMode],
                        default=IncomeMode.ANNUAL.value,
                        help='Unit of the amount: annual (default) or hourly')
    parser.add_argument('--render', '-r',
                        choices=list(RENDERER_REGISTRY.keys()),
                        default='summary',
                        help='Output mode: summary (default) or share')
    parser.add_argument('--reference',
                        help='Path to an alternate growth-details.json')
    parser.add_argument('--animate', '-a',
                        action='store_true',
                        help='Play the eased transition of the headline figures first')
    parser.add_argument('--verbose', '-v',
                        action='store_true',
                        help='Log diagnostics to stderr')

    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format='%(levelname)s %(name)s: %(message)s')

    try:
        details = load_details(args.reference)
    except (OSError, ValueError) as e:
        print(f"Error loading growth details: {e}")
        sys.exit(1)

    raw_input = RawInput(parse_amount(args.amount), IncomeMode(args.mode))
    figures = GapCalculator(details).compute(raw_input)

    if args.animate:
        play_from_zero(figures, details)

    renderer = RENDERER_REGISTRY[args.render](details, raw_input.mode)
    renderer.render(figures)


if __name__ == "__main__":
    main()
