"""Google-style docstring parsing with griffe."""

from griffe import Docstring, DocstringSectionKind
from pydantic import BaseModel


class DocstringInfo(BaseModel):
    """Summary and per-parameter descriptions pulled from a docstring."""

    description: str
    parameters: dict[str, str]


def extract_docs_from_string(docstring_text: str | None) -> DocstringInfo:
    if not docstring_text:
        return DocstringInfo(description="", parameters={})

    sections = Docstring(docstring_text, lineno=1).parse("google", warnings=False)

    description = ""
    parameters: dict[str, str] = {}
    for section in sections:
        if section.kind is DocstringSectionKind.text and not description:
            description = section.value
        elif section.kind is DocstringSectionKind.parameters:
            parameters.update({param.name: param.description for param in section.value})

    return DocstringInfo(description=description, parameters=parameters)
