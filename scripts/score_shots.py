"""
Score a recorded shot file and print the group statistics.

Usage:
    python scripts/score_shots.py shots.yaml
    python scripts/score_shots.py shots.yaml --template pistol-25m-precision --esa 50
    python scripts/score_shots.py shots.yaml --distance 75 --bullseye 110 88
    python scripts/score_shots.py shots.yaml --report out/report.yaml --image out/target.png
"""
import sys
import argparse
from pathlib import Path
import logging

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from shotscore.core import Point, load_shots
from shotscore.target import (
    TARGET_TEMPLATES,
    TargetVisualizer,
    calculate_ring_radii,
    find_template,
    template_from_distance,
    zone_name,
)
from shotscore.analysis import build_report, compute_stats, save_report
from shotscore.session import build_lane_defaults, load_session_settings

# Setup logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


def parse_args():
    parser = argparse.ArgumentParser(
        description="Zone scoring and group statistics for a shot file",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="Templates: " + ", ".join(f"{t.id} ({t.diameter:g}mm)" for t in TARGET_TEMPLATES)
    )

    parser.add_argument("shots", type=Path, help="YAML file with shots")

    template_group = parser.add_mutually_exclusive_group()
    template_group.add_argument(
        "--template",
        type=str,
        default=None,
        help="Catalog template id"
    )
    template_group.add_argument(
        "--distance",
        type=float,
        default=None,
        help="Target distance in meters (virtual template)"
    )

    parser.add_argument("--esa", type=int, default=None, help="ESA parameter (5-96)")
    parser.add_argument(
        "--bullseye",
        type=float,
        nargs=2,
        metavar=("X", "Y"),
        default=None,
        help="Custom bullseye in the 400x400 space (default: center)"
    )
    parser.add_argument("--session-type", type=str, default=None, help="Session type for remarks")
    parser.add_argument("--config", type=Path, default=None, help="Config YAML")
    parser.add_argument("--report", type=Path, default=None, help="Write YAML report here")
    parser.add_argument("--image", type=Path, default=None, help="Write rendered target here")
    parser.add_argument("--verbose", action="store_true", help="Log per-shot classification")

    return parser.parse_args()


def main():
    args = parse_args()

    if args.verbose:
        logging.getLogger("shotscore").setLevel(logging.DEBUG)

    defaults = build_lane_defaults(load_session_settings(args.config))

    if args.template:
        template = find_template(template_id=args.template)
        if template is None:
            logger.error(f"Unknown template: {args.template}")
            return 1
    elif args.distance is not None:
        template = template_from_distance(args.distance)
        if template is None:
            logger.error(f"Invalid distance: {args.distance}")
            return 1
    else:
        template = defaults.resolve_template()

    esa = args.esa if args.esa is not None else defaults.esa
    session_type = args.session_type or defaults.session_type
    bullseye = Point(*args.bullseye) if args.bullseye else None

    try:
        shots = load_shots(args.shots)
    except FileNotFoundError:
        logger.error(f"Shot file not found: {args.shots}")
        return 1

    ring_radii = calculate_ring_radii(template, esa, verbose=args.verbose)
    stats = compute_stats(shots, bullseye, ring_radii, verbose=args.verbose)

    print(f"Template:   {template.name if template else 'none'} "
          f"({template.diameter if template else '-'} mm), ESA {esa}")
    print(f"Rings (px): green={ring_radii.green_radius:.1f} "
          f"orange={ring_radii.orange_radius:.1f} blue={ring_radii.blue_radius:.1f}")
    print(f"Shots:      {stats.shot_count}")
    print(f"Score:      {stats.total_score}/{stats.max_possible_score}")
    print(f"Accuracy:   {stats.accuracy:.1f}%")
    print(f"MPI:        {stats.mpi:.1f} mm from {stats.reference_point}")
    if stats.mpi_coords is not None:
        print(f"True MPI:   ({round(stats.mpi_coords.x)}, {round(stats.mpi_coords.y)})")
    print(f"Group size: {stats.group_size:.1f} mm")
    print(f"Avg / max:  {stats.avg_distance:.1f} / {stats.max_distance:.1f} mm")
    for score in (3, 2, 1, 0):
        print(f"  {zone_name(score):<20} {stats.zone_counts[score]}")

    if args.report:
        report = build_report(
            shots,
            ring_radii,
            bullseye=bullseye,
            template=template,
            esa=esa,
            session_type=session_type,
            stats=stats,
        )
        save_report(args.report, report)
        print(f"Remark:     {report['remark']['rating']}")

    if args.image:
        visualizer = TargetVisualizer(ring_radii, bullseye=bullseye, size=600)
        image = visualizer.render(shots, stats)
        if not visualizer.save(args.image, image):
            return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
