"""Wire shapes of the Onyx chat API, as consumed by this package."""

from typing import Any, TypedDict


class CreateChatSessionRequest(TypedDict):
    persona_id: int
    description: str


class CreateChatSessionResponse(TypedDict, total=False):
    chat_session_id: str


class SearchFilters(TypedDict):
    source_type: list[str] | None
    document_set: list[str] | None
    time_cutoff: str | None
    tags: list[Any]


class ChatRetrievalOptions(TypedDict):
    run_search: str
    real_time: bool
    filters: SearchFilters


class LLMOverride(TypedDict):
    model_provider: str
    model_version: str


class SendMessageRequest(TypedDict):
    alternate_assistant_id: int
    chat_session_id: str
    message: str
    prompt_id: int
    search_doc_ids: list[int] | None
    file_descriptors: list[Any]
    regenerate: bool
    retrieval_options: ChatRetrievalOptions
    prompt_override: dict[str, Any] | None
    llm_override: LLMOverride
    use_agentic_search: bool
    parent_message_id: int | None


class SearchDocument(TypedDict, total=False):
    document_id: str
    chunk_ind: int
    semantic_identifier: str
    link: str | None
    blurb: str
    source_type: str
    boost: int
    hidden: bool
    metadata: dict[str, Any]
    score: float | None
    is_relevant: bool | None
    relevance_explanation: str | None
    match_highlights: list[str]
    updated_at: str | None
    primary_owners: list[str] | None
    secondary_owners: list[str] | None
    is_internet: bool
    db_doc_id: int
    content: str


class ContextDocs(TypedDict, total=False):
    top_documents: list[SearchDocument]


class SendMessageResponse(TypedDict, total=False):
    message_id: int
    message: str
    rephrased_query: str | None
    context_docs: ContextDocs | None


class DocumentSearchRetrievalOptions(TypedDict):
    enable_auto_detect_filters: bool
    offset: int
    limit: int
    dedupe_docs: bool


class DocumentSearchRequest(TypedDict):
    message: str
    search_type: str
    retrieval_options: DocumentSearchRetrievalOptions
    evaluation_type: str
    chunks_above: int
    chunks_below: int
    full_doc: bool


class DocumentSearchResponse(TypedDict, total=False):
    top_documents: list[SearchDocument] | None
    llm_indices: list[int]
