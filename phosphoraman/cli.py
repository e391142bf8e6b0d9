"""Command line interface: baseline a spectrum file and fit its Raman modes.

Example::

    phosphoraman flake_01.txt --guess 1200 800 2100 362 439 467 \\
        --output flake_01_baselined.csv --plot flake_01_fit.png
"""

import argparse
import logging
import sys
from typing import List, Optional

from phosphoraman import __version__
from phosphoraman.config import FitSettings
from phosphoraman.exceptions import PhosphoramanError
from phosphoraman.io import load_spectrum, peak_table, write_baselined_spectrum, write_peak_table
from phosphoraman.processing import analyze_spectrum

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="phosphoraman",
        description="Remove the arPLS baseline from a phosphorene Raman spectrum "
                    "and fit the Ag1, B2g and Ag2 modes with Lorentzians."
    )
    parser.add_argument("spectrum", help="Two-column text or CSV file (Raman shift, intensity)")
    parser.add_argument(
        "--guess", nargs="+", type=float, required=True, metavar="VALUE",
        help="Initial guesses: Ag1 B2g Ag2 intensities then their locations "
             "(6 values), optionally followed by three HWHM (9 values)"
    )
    parser.add_argument("--smoothness", type=float, default=1e3,
                        help="arPLS smoothness parameter (default: %(default)g)")
    parser.add_argument("--min-diff", type=float, default=1e-6,
                        help="arPLS weight tolerance (default: %(default)g)")
    parser.add_argument("--cutoff", type=float, default=500.0,
                        help="Fit only data below this Raman shift (default: %(default)g)")
    parser.add_argument("--output", help="Write the baselined data below the cutoff to this CSV file")
    parser.add_argument("--peaks", help="Write the fitted modes to this CSV file")
    parser.add_argument("--plot", help="Save a figure of the data and fits to this file")
    parser.add_argument("-v", "--verbose", action="store_true", help="Show progress messages")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(asctime)s | %(levelname)-5s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S"
    )

    if len(args.guess) not in (6, 9):
        print(f"error: --guess takes 6 or 9 values, got {len(args.guess)}", file=sys.stderr)
        return 2

    try:
        x, y = load_spectrum(args.spectrum)
        analysis = analyze_spectrum(
            x, y, args.guess,
            smoothness_param=args.smoothness,
            min_diff=args.min_diff,
            cutoff=args.cutoff,
            fit_settings=FitSettings(cutoff=args.cutoff)
        )
    except PhosphoramanError as exc:
        logger.error("%s", exc)
        print(f"error: {exc}", file=sys.stderr)
        return 1

    print(peak_table(analysis.fit.modes).to_string(index=False, float_format="%.4g"))

    if args.output:
        write_baselined_spectrum(analysis.parsed, args.output)
        logger.info("Baselined data written to %s", args.output)
    if args.peaks:
        write_peak_table(analysis.fit.modes, args.peaks)
        logger.info("Peak table written to %s", args.peaks)
    if args.plot:
        from phosphoraman.visualization import plot_fit
        fig = plot_fit(analysis.parsed[:, 0], analysis.parsed[:, 1], analysis.fit)
        fig.savefig(args.plot, dpi=150, bbox_inches="tight")
        logger.info("Figure saved to %s", args.plot)

    return 0


if __name__ == "__main__":
    sys.exit(main())
