"""
Article content loading
"""
from pathlib import Path
from typing import Optional, Union

from edunews.errors import ContentFileError, NoContentProvided


def load_content(
    content: Optional[str] = None,
    content_file: Optional[Union[str, Path]] = None
) -> str:
    """
    Load article content from exactly one source.

    Args:
        content: Inline article text
        content_file: Path to a UTF-8 text file

    Raises:
        NoContentProvided: Neither or both sources given
        ContentFileError: File could not be read
    """
    if content is not None and content_file is not None:
        raise NoContentProvided()

    if content is not None:
        if not content:
            raise NoContentProvided()
        return content

    if content_file is not None:
        try:
            return Path(content_file).read_text(encoding='utf-8')
        except OSError as e:
            raise ContentFileError(str(content_file), e) from e

    raise NoContentProvided()
