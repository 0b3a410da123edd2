"""
Morphological Synthesizer backed by pyinflect.
"""

import logging
import re
from typing import List

import pyinflect

logger = logging.getLogger(__name__)


class PyInflectSynthesizer:
    """
    Produces inflected forms of an English base form.

    pyinflect groups forms by Penn Treebank tag (VBD, VBZ, NNS, JJR, ...);
    only tags fully matching `pos_tag_regex` contribute forms.
    """

    def synthesize(self, lemma: str, pos_tag_regex: str = ".*") -> List[str]:
        tag_pattern = re.compile(pos_tag_regex)
        inflections = pyinflect.getAllInflections(lemma) or {}
        forms: List[str] = []
        for tag in sorted(inflections):
            if not tag_pattern.fullmatch(tag):
                continue
            for form in inflections[tag]:
                if form and form not in forms:
                    forms.append(form)
        logger.debug(f"Synthesized {forms} for '{lemma}' ({pos_tag_regex})")
        return forms
