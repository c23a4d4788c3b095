"""
Demonstration of the Image Processor core.

Loads an image, runs every immutable, mutable and slice operation on it,
and writes each result next to the input.

Usage:
    python examples/image_processor_demo.py input.png [output_dir]
"""

import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

import logging

from IP_Libs.CodecLib.image_io import import_image, save_image
from IP_Libs.ImageCoreLib import Dimensions, ImageError, OwnedImage


def run_demo(input_path: Path, output_dir: Path) -> None:
    """Run every operation once and save the results into output_dir."""
    image = import_image(input_path)
    print(f"Loaded {input_path} ({image.width}x{image.height})")

    region = Dimensions(500, 400)

    # Immutable operations
    with image.crop(100, 100, region) as cropped:
        save_image(cropped, output_dir / "cropped.png")

    save_image(image.flipped(True, False), output_dir / "horiz_flipped.png")
    save_image(image.flipped(False, True), output_dir / "verti_flipped.png")
    save_image(image.flipped(True, True), output_dir / "horiz_verti_flipped.png")
    save_image(image.greyscale(), output_dir / "greyscale.png")
    save_image(image.blurred(3), output_dir / "blurred.png")

    # Mutable operations on a copy
    image_copy = OwnedImage.empty()
    image_copy.copy_from(image)

    image_copy.flip(True, False)
    save_image(image_copy, output_dir / "horiz_flipped_mut.png")

    image_copy.greyscale_mut()
    save_image(image_copy, output_dir / "greyscale_mut.png")

    image_copy.blur(2)
    save_image(image_copy, output_dir / "blurred_mut.png")

    # Slice operations
    with image.crop(100, 100, region) as cropped:
        save_image(cropped.greyscale(), output_dir / "cropped_greyscale.png")
        save_image(cropped.blurred(3), output_dir / "cropped_blurred.png")
        save_image(cropped.flipped(True, False), output_dir / "cropped_flipped.png")

    print(f"Saved results to {output_dir}")


def main():
    """Main function to run the demo."""
    if len(sys.argv) < 2:
        print("Usage:")
        print("  python image_processor_demo.py <input_image> [output_dir]")
        return 1

    logging.basicConfig(level=logging.INFO)

    input_path = Path(sys.argv[1])
    output_dir = Path(sys.argv[2]) if len(sys.argv) >= 3 else input_path.parent
    output_dir.mkdir(parents=True, exist_ok=True)

    try:
        run_demo(input_path, output_dir)
    except ImageError as e:
        print(f"Error: {e}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
