import argparse
import json
from datetime import date
from pathlib import Path
from random import Random
from typing import Any, Dict, List, Optional

from . import __version__
from .engine import predict_detailed
from .env import Settings, load_env
from .logger import get_logger
from .schema import validate_profile, validate_profile_strict


def _read_json(input_path: Path) -> Dict[str, Any]:
    if not input_path.exists():
        raise SystemExit(f"Input file not found: {input_path}")
    with input_path.open("r", encoding="utf-8") as f:
        try:
            data = json.load(f)
        except ValueError as e:
            raise SystemExit(f"Invalid JSON in {input_path}: {e}")
    if not isinstance(data, dict):
        raise SystemExit(f"Expected a JSON object in {input_path}")
    return data


def _parse_pairs(pairs: Optional[List[str]]) -> Dict[str, str]:
    out: Dict[str, str] = {}
    for pair in pairs or []:
        if "=" not in pair:
            raise SystemExit(f"Expected key=value, got: {pair}")
        k, v = pair.split("=", 1)
        out[k.strip()] = v.strip()
    return out


def _parse_as_of(value: Optional[str]) -> Optional[date]:
    if not value:
        return None
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise SystemExit(f"--as-of must be YYYY-MM-DD, got: {value}")


def _rng(args: argparse.Namespace, settings: Settings) -> Random:
    seed = args.seed if args.seed is not None else settings.seed
    return Random(seed)


def _print_trace(trace, explain: bool) -> None:
    result = trace.result
    if trace.name:
        print(f"Name: {trace.name}")
    print(f"Death year: {result.death_year}")
    print(f"Cause: {result.top_cause}")
    print(f"Reason: {result.reason}")
    if not explain:
        return
    print()
    print(f"Baseline: {trace.baseline}")
    print(f"Life expectancy: {trace.life_expectancy}")
    print(f"Death age: {trace.death_age}")
    print("Scores:")
    for cause, score in sorted(trace.scores, key=lambda cs: -cs[1]):
        print(f"  {score:6.2f}  {cause}")
    if trace.defaults:
        print(f"Defaults applied: {', '.join(trace.defaults)}")


def cmd_predict(args: argparse.Namespace, settings: Settings) -> None:
    logger = get_logger()
    data: Dict[str, Any] = _read_json(Path(args.input)) if args.input else {}
    data.update(_parse_pairs(args.set))

    for warning in validate_profile(data):
        logger.warning(warning)

    trace = predict_detailed(data, rng=_rng(args, settings), now=_parse_as_of(args.as_of))
    if args.json:
        payload = trace.to_dict() if args.explain else trace.result.to_dict()
        print(json.dumps(payload, indent=2, ensure_ascii=False))
        return
    _print_trace(trace, args.explain)


def cmd_batch(args: argparse.Namespace, settings: Settings) -> None:
    logger = get_logger()
    input_path = Path(args.input)
    if not input_path.exists():
        raise SystemExit(f"Input file not found: {input_path}")
    rng = _rng(args, settings)
    now = _parse_as_of(args.as_of)
    count = 0
    skipped = 0
    with input_path.open("r", encoding="utf-8") as f:
        for lineno, line in enumerate(f, start=1):
            line = line.strip()
            if not line or line.startswith("#"):
                continue
            try:
                data = json.loads(line)
            except ValueError as e:
                logger.warning("Skipping malformed line", line=lineno, error=str(e))
                skipped += 1
                continue
            if not isinstance(data, dict):
                logger.warning("Skipping non-object line", line=lineno)
                skipped += 1
                continue
            trace = predict_detailed(data, rng=rng, now=now)
            count += 1
            print(json.dumps({"line": lineno, **trace.result.to_dict()}, ensure_ascii=False))
    print(f"Done. predicted={count} skipped={skipped}")
    logger.log_metrics_summary()


def cmd_validate(args: argparse.Namespace, settings: Settings) -> None:
    data = _read_json(Path(args.input))
    if args.strict:
        _, errors = validate_profile_strict(data)
    else:
        errors = validate_profile(data)
    if errors:
        print("Invalid:")
        for e in errors:
            print(f" - {e}")
        raise SystemExit(2)
    print("Valid")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="lifespan", description="Death-year and cause-of-death estimator")
    parser.add_argument("--version", action="store_true", help="Show version")

    subparsers = parser.add_subparsers(dest="command")
    prd = subparsers.add_parser("predict", help="Predict for one profile (JSON file and/or key=value pairs)")
    prd.add_argument("--input", help="Path to profile JSON")
    prd.add_argument("--set", action="append", metavar="KEY=VALUE", help="Profile field, repeatable. Example: --set smoke=yes")
    prd.add_argument("--seed", type=int, help="Seed the random source (or set LIFESPAN_SEED)")
    prd.add_argument("--as-of", help="Evaluation date YYYY-MM-DD (default: today)")
    prd.add_argument("--json", action="store_true", help="Print the result as JSON")
    prd.add_argument("--explain", action="store_true", help="Include baseline, life expectancy and cause scores")
    prd.set_defaults(func=cmd_predict)

    bat = subparsers.add_parser("batch", help="Predict for every profile in a JSON-lines file")
    bat.add_argument("--input", required=True, help="File with one profile JSON object per line")
    bat.add_argument("--seed", type=int, help="Seed the random source (or set LIFESPAN_SEED)")
    bat.add_argument("--as-of", help="Evaluation date YYYY-MM-DD (default: today)")
    bat.set_defaults(func=cmd_batch)

    val = subparsers.add_parser("validate", help="Check a profile JSON for values that will be defaulted")
    val.add_argument("--input", required=True, help="Path to profile JSON")
    val.add_argument("--strict", action="store_true", help="Also require birth date, yes/no flags and known options")
    val.set_defaults(func=cmd_validate)
    return parser


def main(argv: Optional[List[str]] = None):
    # Load .env if present (LIFESPAN_LOG_LEVEL, LIFESPAN_SEED, etc.)
    load_env()
    settings = Settings.from_env()
    get_logger(level=settings.log_level, log_dir=settings.log_dir, enable_file=settings.log_file)

    parser = build_parser()
    args = parser.parse_args(argv)

    if args.version:
        print(__version__)
        return

    if hasattr(args, "func"):
        args.func(args, settings)
        return

    parser.print_help()


if __name__ == "__main__":
    main()
