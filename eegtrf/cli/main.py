"""Main CLI entry point for eegtrf."""

import argparse
import logging
import sys
from pathlib import Path

from eegtrf.core.validation import TRFError
from eegtrf.utils.logging import setup_logging

from .train import train_command


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        description="eegtrf - Temporal response functions for EEG",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Forward model, 0-250 ms lags
  eegtrf train --stim envelope.npy --resp eeg.npy --fs 128 --dir 1 \\
      --tmin 0 --tmax 250 --lambda 100 --output model.npz

  # Backward model with options from YAML
  eegtrf train --stim envelope.npz --resp eeg.npz --fs 128 --dir -1 \\
      --tmin 0 --tmax 250 --lambda 100 --config train.yaml --output decoder.npz
        """
    )

    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    train_parser = subparsers.add_parser(
        'train',
        help='Train a TRF model',
        description='Fit a forward (encoding) or backward (decoding) model'
    )
    train_parser.add_argument('--stim', type=Path, required=True, help='Stimulus (.npy or .npz)')
    train_parser.add_argument('--resp', type=Path, required=True, help='Response (.npy or .npz)')
    train_parser.add_argument('--fs', type=float, required=True, help='Sample rate (Hz)')
    train_parser.add_argument(
        '--dir',
        type=int,
        required=True,
        choices=[1, -1],
        help='1 for forward (encoding), -1 for backward (decoding)'
    )
    train_parser.add_argument('--tmin', type=float, required=True, help='Minimum time lag (ms)')
    train_parser.add_argument('--tmax', type=float, required=True, help='Maximum time lag (ms)')
    train_parser.add_argument(
        '--lambda',
        dest='lam',
        type=float,
        required=True,
        help='Regularization parameter'
    )
    train_parser.add_argument('--config', type=Path, help='YAML file with training options')
    train_parser.add_argument('--method', type=str, help='ridge, Tikhonov or ols')
    train_parser.add_argument('--type', type=str, help='multi or single')
    train_parser.add_argument('--split', type=int, help='Segments per trial')
    train_parser.add_argument('--dim', type=int, help='1 if observations are rows, 2 if columns')
    train_parser.add_argument('--n-jobs', dest='n_jobs', type=int, help='Threads for single-lag solves')
    train_parser.add_argument(
        '--no-zeropad',
        dest='zeropad',
        action='store_const',
        const=False,
        default=None,
        help='Delete zero-padded rows of the design matrix'
    )
    train_parser.add_argument('--output', type=Path, required=True, help='Output model (.npz)')
    train_parser.add_argument('--verbose', '-v', action='store_true', help='Debug logging')

    return parser


def main(argv=None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    setup_logging(level=logging.DEBUG if args.verbose else logging.WARNING)

    try:
        if args.command == 'train':
            train_command(args)
        else:
            parser.print_help()
            return 1
    except KeyboardInterrupt:
        print("\n\nInterrupted by user.")
        return 130
    except TRFError as e:
        print(f"\nError: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == '__main__':
    sys.exit(main())
