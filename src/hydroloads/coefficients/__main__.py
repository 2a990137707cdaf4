#!/usr/bin/env python3
"""
Coefficient inspection - loads one body's hydrodynamic coefficients and
reports their dimensions, scaling constants and equilibrium buoyancy.

Usage:
    python -m hydroloads.coefficients \
        --file hydroData/sphere.h5 \
        --body body1 \
        --output artifact/sphere.coefficients.json \
        --plot artifact/sphere.irf.png
"""

import sys
import os
import json
import argparse

from hydroloads.errors import HydroCoefficientError
from hydroloads.forces.buoyancy import BuoyancyForce

from .store import load_coefficients, DEFAULT_BODY
from .plot import plot_impulse_response


def main():
    parser = argparse.ArgumentParser(
        description='Inspect hydrodynamic coefficients of one body',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__
    )
    parser.add_argument('--file', required=True,
                        help='Path to coefficient file (.h5/.hdf5 or .npz)')
    parser.add_argument('--body', default=DEFAULT_BODY,
                        help=f'Body group name in the file (default: {DEFAULT_BODY})')
    parser.add_argument('--output',
                        help='Path to output JSON file (optional)')
    parser.add_argument('--plot',
                        help='Path to output PNG plot of the impulse response (optional)')
    parser.add_argument('--quiet', action='store_true',
                        help='Suppress progress output')

    args = parser.parse_args()

    if not os.path.exists(args.file):
        print(f"ERROR: Coefficient file not found: {args.file}", file=sys.stderr)
        sys.exit(1)

    verbose = not args.quiet

    if verbose:
        print(f"Loading hydrodynamic coefficients: {args.file} [{args.body}]")

    try:
        store = load_coefficients(args.file, args.body)
    except HydroCoefficientError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        sys.exit(1)

    buoyancy = BuoyancyForce(store)

    result = store.summary()
    result['buoyancy_force_N'] = buoyancy.magnitude
    result['validator'] = 'coefficients'

    if verbose:
        print(f"  Degrees of freedom: {store.dof_count}")
        print(f"  Impulse response: {store.step_count} steps, dt={store.timestep:.4g} s")
        print(f"  rho: {store.rho:.1f} kg/m³, g: {store.g:.3f} m/s²")
        print(f"  Displaced volume: {store.displaced_volume:.4f} m³")
        print(f"  Buoyancy force: {buoyancy.magnitude:.2f} N")

    if args.output:
        os.makedirs(os.path.dirname(args.output) or '.', exist_ok=True)
        with open(args.output, 'w') as f:
            json.dump(result, f, indent=2)
        if verbose:
            print(f"  Output: {args.output}")

    if args.plot:
        plot_impulse_response(store, args.plot, verbose=verbose)


if __name__ == "__main__":
    main()
