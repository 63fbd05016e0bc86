"""
The `api` package defines the backend's HTTP interface,
along with supporting utilities and data models.

It integrates FastAPI routing, the error taxonomy and the persona response
generator. The package ensures clean request/response validation and
orchestration of the send-message workflow.

Contents
--------
- fast_api
    Defines the FastAPI router with endpoints for:
        * Persona listing, category filtering, search and lookup
        * Chat session creation/resumption and persona switching
        * Messaging: send (with persona reply), fetch and clear

- models
    Pydantic schemas for request/response validation:
        * Persona, session and message payloads (camelCase on the wire)
        * Message exchange and error bodies

- errors
    Error taxonomy and FastAPI exception handlers:
        * `ValidationError` (400), `NotFoundError` (404)
        * `GeneratorUnavailable` (503), `InternalError` (500)

- llm_pipeline
    Persona response generation:
        * Builds the in-character system prompt
        * Calls LangChain's `ChatOpenAI` with a bounded timeout
"""
