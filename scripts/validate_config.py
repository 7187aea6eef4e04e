#!/usr/bin/env python3
"""Configuration validation script."""

import sys
from pathlib import Path
from typing import List, Optional

# Add the project root to the Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from mstime.config.loader import ConfigLoader
from mstime.config.validation import ConfigValidator, ValidationError


def validate_config_dir(config_dir: Optional[Path] = None) -> List[ValidationError]:
    """Validate the merged configuration of a config directory."""
    loader = ConfigLoader.create(config_dir)
    config = loader.merge_config()
    return ConfigValidator.validate_config(config)


def main():
    """Main validation function."""
    config_dir = Path(sys.argv[1]) if len(sys.argv) > 1 else None
    loader = ConfigLoader.create(config_dir)

    print(f"🔍 Validating mstime configuration in {loader.config_dir}...")

    try:
        errors = validate_config_dir(loader.config_dir)
    except Exception as e:
        print(f"❌ Error loading configuration: {e}")
        sys.exit(1)

    if errors:
        print(f"❌ Found {len(errors)} validation errors:")
        for error in errors:
            print(f"  • {error.field}: {error.message} (value: {error.value})")
        sys.exit(1)

    config = loader.load()
    offset = config.clock.utc_offset_seconds
    print(f"✅ Configuration is valid")
    print(f"   UTC offset: {'host' if offset is None else f'{offset}s'}")
    print(f"   Pre-market: {config.session.pre_market_hour:02d}:"
          f"{config.session.pre_market_minute:02d}:{config.session.pre_market_second:02d}")


if __name__ == "__main__":
    main()
