import argparse
import sys
from pathlib import Path

# Add project root to path for robust execution
project_root = Path(__file__).parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from tokwrap.config import load_config
from tokwrap.data_validation import validate
from tokwrap.io_utils import load_tokens, save_tokens
from tokwrap.layout import make_scorer, wrap_tokens
from tokwrap.render import render_lines


def main():
    """
    Main command-line interface for the token wrapping engine.

    This script performs the following steps:
    1.  Loads the configuration file (`config.yaml`) with the line length limits
        and break cost table.
    2.  Loads the token run from the input JSON file.
    3.  Runs the windowed break search over the run.
    4.  Renders the wrapped run to text and writes it to the output file.
    5.  Optionally saves the labeled tokens and reports validation issues.
    """
    parser = argparse.ArgumentParser(
        description="Choose line breaks for a run of source tokens.",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter
    )
    parser.add_argument(
        "--input",
        required=True,
        help="Path to the input tokens JSON file."
    )
    parser.add_argument(
        "--output",
        required=True,
        help="Path to write the wrapped text."
    )
    parser.add_argument(
        "--config",
        default="config.yaml",
        help="Path to the configuration YAML file."
    )
    parser.add_argument(
        "--starting-column",
        type=int,
        default=0,
        help="Column already used on the first line before the run starts."
    )
    parser.add_argument(
        "--max-iterations",
        type=int,
        default=None,
        help="Cap on placements explored per search window (overrides the config)."
    )
    parser.add_argument(
        "--save-labeled-json",
        action="store_true",
        help="In addition to the text, save the tokens with their break decisions as JSON."
    )
    parser.add_argument(
        "--validate",
        action="store_true",
        help="Report lines that exceed the configured limits."
    )
    parser.add_argument(
        "--progress",
        dest="progress",
        action="store_true",
        help="Show a progress bar while wrapping.",
    )
    parser.add_argument(
        "--no-progress",
        dest="progress",
        action="store_false",
        help="Hide the progress bar regardless of config settings.",
    )
    parser.set_defaults(progress=None)
    args = parser.parse_args()

    try:
        # 1. Load configuration
        print(f"Loading configuration from {args.config}...")
        cfg = load_config(args.config)

        if args.progress is not None:
            cfg.show_progress = args.progress
        if args.max_iterations is not None:
            if args.max_iterations < 1:
                raise ValueError("--max-iterations must be positive")
            cfg.max_search_iterations = args.max_iterations

        # 2. Load input data
        print(f"Loading tokens from {args.input}...")
        tokens = load_tokens(args.input)

        # 3. Choose line breaks
        print("Choosing line breaks...")
        scorer = make_scorer(cfg)
        wrapped = wrap_tokens(tokens, scorer, cfg, starting_column=args.starting_column)

        # 4. Render and write output
        lines = render_lines(wrapped, cfg, starting_column=args.starting_column)
        output_path = Path(args.output)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        with open(output_path, "w", encoding="utf-8") as f:
            f.write("\n".join(lines) + ("\n" if lines else ""))

        print(f"\nSuccessfully wrote {len(lines)} line(s) to {args.output}")

        if args.save_labeled_json:
            json_output_path = output_path.with_suffix('.json')
            save_tokens(str(json_output_path), wrapped)
            print(f"Successfully wrote labeled JSON to {json_output_path}")

        if args.validate:
            report = validate(wrapped, cfg, starting_column=args.starting_column)
            print(f"Validation found {report['issue_count']} issue(s).")
            for issue in report["issues"]:
                print(f"  [{issue['type']}] {issue['message']}")

    except (FileNotFoundError, ValueError, TypeError, KeyError) as e:
        print(f"\nError: {e}", file=sys.stderr)
        sys.exit(1)

if __name__ == "__main__":
    main()
