"""Taxonomy document loading.

The packaged document ships inside ``nna_taxonomy/data``. A custom document
can be given as a path; both go through the same schema validation.
"""

import logging
from importlib import resources
from pathlib import Path
from typing import Optional, Union

from nna_taxonomy.schemas.taxonomy import TaxonomyDocument

logger = logging.getLogger(__name__)

PACKAGED_TAXONOMY = "taxonomy.json"


def read_packaged_text() -> str:
    """Return the raw JSON of the packaged taxonomy document."""
    return (
        resources.files("nna_taxonomy")
        .joinpath("data")
        .joinpath(PACKAGED_TAXONOMY)
        .read_text(encoding="utf-8")
    )


def load_document(source: Optional[Union[str, Path]] = None) -> TaxonomyDocument:
    """Load and validate a taxonomy document.

    Parameters
    ----------
    source : str or Path, optional
        Path to a taxonomy JSON file. None loads the packaged document.

    Returns
    -------
    TaxonomyDocument
        Validated document. Incomplete category/subcategory entries are
        kept; the table reports them as issues.

    Raises
    ------
    FileNotFoundError
        If ``source`` does not exist.
    ValidationError
        If the JSON is malformed or names a layer outside the fixed set.
    """
    if source is None:
        text = read_packaged_text()
        origin = f"package:{PACKAGED_TAXONOMY}"
    else:
        path = Path(source)
        if not path.exists():
            raise FileNotFoundError(f"Taxonomy not found: {path}")
        text = path.read_text(encoding="utf-8")
        origin = str(path)

    document = TaxonomyDocument.model_validate_json(text)
    logger.info("Loaded taxonomy %s (version=%s, layers=%d)",
                origin, document.version, len(document.layers))
    return document
