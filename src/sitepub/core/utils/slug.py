"""Slug generation for path aliases"""

import re


_SPECIAL = 'àáâäæãåāăąçćčđďèéêëēėęěğǵḧîïíīįìłḿñńǹňôöòóœøōõőṕŕřßśšşșťțûüùúūǘůűųẃẍÿýžźż·/_,:;'
_ASCII   = 'aaaaaaaaaacccddeeeeeeeegghiiiiiilmnnnnoooooooooprrsssssttuuuuuuuuuwxyyzzz------'
_FOLD = str.maketrans(_SPECIAL, _ASCII)


def slugify(text) -> str:
    """Convert text to a lowercase, hyphen-separated, ASCII-only slug.

    Accented characters fold to their ASCII equivalent through a fixed table
    and '&' becomes 'and'; anything else outside [a-z0-9-] is dropped.
    """
    text = str(text if text is not None else '').lower()
    text = re.sub(r'\s+', '-', text)
    text = text.translate(_FOLD)
    text = text.replace('&', '-and-')
    text = re.sub(r'[^\w-]+', '', text, flags=re.ASCII)
    return re.sub(r'-{2,}', '-', text).strip('-')
