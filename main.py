"""Simple CLI entry to import a Travel Compositor travel as an offerte."""

import argparse
import json
from pathlib import Path

from tc_import import import_tc_travel, map_tc_data_to_offerte, result_to_dict
from tc_import.config import configure_logging


def load_travel(path: Path) -> dict:
    return json.loads(path.read_text(encoding="utf-8"))


def main() -> None:
    parser = argparse.ArgumentParser(description="Map a Travel Compositor travel to an ordered offerte.")
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument("payload_file", type=Path, nargs="?", help="Path to a fetched TC travel JSON file")
    source.add_argument("--travel-id", help="Fetch this travel through the import function instead")
    parser.add_argument("--microsite", help="Microsite to fetch from (default: auto-detect)")
    parser.add_argument("--output", type=Path, help="Optional path to save the offerte JSON")
    args = parser.parse_args()

    configure_logging()
    if args.travel_id:
        result = import_tc_travel(args.travel_id, args.microsite)
    else:
        result = map_tc_data_to_offerte(load_travel(args.payload_file))
    output = json.dumps(result_to_dict(result), ensure_ascii=False, indent=2)

    if args.output:
        args.output.write_text(output, encoding="utf-8")
        print(f"Offerte saved to {args.output}")
    else:
        print(output)


if __name__ == "__main__":
    main()
