import argparse
import logging
import sys
from pathlib import Path
from dotenv import load_dotenv

# Load environment variables first
load_dotenv()

from ..errors import WallPaintError
from ..models.color import Color
from ..models.palette import load_palette
from ..pipeline.wall_painter import apply_shade, choose_base_color, load_session, select_wall
from ..services.image_service import ImageService
from ..services.shade_service import ShadeService

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="wallpaint",
        description="Detect the wall under a pixel and repaint it with a shade of a paint color.",
    )
    ap.add_argument("image", type=Path, help="input photograph")
    ap.add_argument("--seed", type=int, nargs=2, metavar=("X", "Y"), required=True,
                    help="pixel on the wall, in image coordinates")
    color = ap.add_mutually_exclusive_group(required=True)
    color.add_argument("--color", help="base paint color as hex, e.g. '#2196F3'")
    color.add_argument("--palette-index", type=int, help="index into the built-in palette")
    ap.add_argument("--shade", type=int, default=0,
                    help="shade index, 0 = base color, last = white (default: 0)")
    ap.add_argument("--threshold", type=int, default=None,
                    help="Manhattan RGB similarity threshold (default: WALL_THRESHOLD or 50)")
    ap.add_argument("--output", type=Path, default=None,
                    help="where to write the repainted image (default: <image>_painted.png)")
    ap.add_argument("--outline", type=Path, default=None,
                    help="also write a preview with the detected wall outlined")
    ap.add_argument("--swatches", type=Path, default=None,
                    help="also write the palette gradients and the chosen shade grid")
    ap.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    return ap


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    # --- Centralized Logging Configuration ---
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s - %(name)-25s - %(levelname)-8s - %(message)s',
        datefmt='%H:%M:%S'
    )

    image_service = ImageService()
    shade_service = ShadeService()

    try:
        if args.color is not None:
            base = Color.from_hex(args.color)
        else:
            palette = load_palette()
            if not 0 <= args.palette_index < len(palette):
                logger.error(f"Palette index {args.palette_index} outside 0..{len(palette) - 1}")
                return 1
            base = palette[args.palette_index]

        session = load_session(args.image, image_service=image_service)

        x, y = args.seed
        region = select_wall(session, x, y, args.threshold)
        shades = choose_base_color(session, base, shade_service=shade_service)

        if args.outline is not None:
            preview = image_service.create_buffer(image_service.outline_region(session.buffer, region))
            image_service.save(preview, args.outline)

        apply_shade(session, args.shade)

        output = args.output or args.image.with_name(f"{args.image.stem}_painted.png")
        image_service.save(session.buffer, output)

        if args.swatches is not None:
            rows = shade_service.palette_gradients() + [shades]
            image_service.save(image_service.create_buffer(image_service.render_swatches(rows)), args.swatches)
    except (WallPaintError, ValueError, IndexError, OSError) as err:
        logger.error(str(err))
        return 1

    print(f"Painted wall {region.as_dict()} with {shades[args.shade].to_hex()} -> {output}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
