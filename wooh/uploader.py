"""
Create WooCommerce products from a directory of images.

Each image is uploaded to the WordPress media library and a product named
after the file stem is created around it, using the configured template.
The first failure stops the whole directory pass.
"""

import os
import logging
from typing import Dict, Iterable, List

from .config import log_and_status
from .models import ProductTemplate
from .woo_api import WooClient


IMAGE_EXTENSIONS = (".jpg", ".jpeg", ".png", ".gif")


def find_images(dir_path: str, extensions: Iterable[str] = IMAGE_EXTENSIONS) -> List[str]:
    """
    Image file names directly inside dir_path, sorted by name.

    Extension matching is case-sensitive.
    """
    extensions = tuple(extensions)
    names = []
    for name in sorted(os.listdir(dir_path)):
        if os.path.isdir(os.path.join(dir_path, name)):
            continue
        if os.path.splitext(name)[1] in extensions:
            names.append(name)
    return names


def upload_image_product(client: WooClient, image_path: str, template: ProductTemplate) -> Dict:
    """Upload one image and create its product. Returns the created product."""
    product_name = os.path.splitext(os.path.basename(image_path))[0]

    media = client.upload_media(image_path, title=product_name, caption=template.description)
    images = [{"id": media["id"], "src": media["source_url"]}]

    logging.info(f"Creating product: {product_name}")
    created = client.create_product(template.build_product_body(product_name, images))
    logging.info(f"Product created: {product_name} (media {media['id']})")
    return created


def upload_directory(
    client: WooClient,
    dir_path: str,
    template: ProductTemplate,
    extensions: Iterable[str] = IMAGE_EXTENSIONS,
    status_fn=None
) -> List[Dict]:
    """
    Turn every image in dir_path into a WooCommerce product.

    Args:
        client: Store client
        dir_path: Directory to scan (not recursive)
        template: Default product fields
        extensions: Accepted file extensions
        status_fn: Optional status update function

    Returns:
        Created products, in file name order

    Raises:
        OSError: If the directory or an image cannot be read
        NetworkError, RemoteError, DecodeError: If an upload or product
            creation fails; later images are not processed
    """
    slugs = [c.value for c in template.categories if c.is_slug]
    if slugs:
        logging.warning(f"Template categories {slugs} are not numeric; they are sent to the store as ids unchanged")

    names = find_images(dir_path, extensions)
    log_and_status(status_fn, f"Found {len(names)} images in {dir_path}")

    created = []
    for i, name in enumerate(names, 1):
        log_and_status(status_fn, f"Uploading image {i}/{len(names)}: {name}")
        created.append(upload_image_product(client, os.path.join(dir_path, name), template))

    log_and_status(status_fn, f"✅ Created {len(created)} products from {dir_path}")
    return created
