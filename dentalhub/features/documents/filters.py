# Documents Feature - Client-side filtering

from typing import Iterable, List, Optional, Tuple
from dentalhub.features.documents.models import DocumentCategory
from dentalhub.features.documents.schemas import DocumentResponse


CATEGORY_LABELS = {
    DocumentCategory.POLICIES: "Policies",
    DocumentCategory.PROTOCOLS: "Protocols",
    DocumentCategory.FORMS: "Forms",
    DocumentCategory.INSTRUCTIONS: "Instructions",
    DocumentCategory.INSURANCE: "Insurance",
    DocumentCategory.OTHER: "Other",
}


def category_options() -> List[Tuple[Optional[DocumentCategory], str]]:
    """Filter choices in display order, "All" first."""
    return [(None, "All")] + list(CATEGORY_LABELS.items())


def matches_search(document: DocumentResponse, term: str) -> bool:
    """Case-insensitive substring match on the title or any tag."""
    term = term.strip().lower()
    if not term:
        return True
    if term in document.title.lower():
        return True
    return any(term in tag.lower() for tag in document.tags)


def filter_documents(
    documents: Iterable[DocumentResponse],
    category: Optional[DocumentCategory] = None,
    search: str = ""
) -> List[DocumentResponse]:
    """Apply the category and search filters, preserving order."""
    filtered = list(documents)
    
    if category:
        filtered = [document for document in filtered if document.category == category]
    
    if search and search.strip():
        filtered = [document for document in filtered if matches_search(document, search)]
    
    return filtered
