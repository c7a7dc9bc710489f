"""
LLM Providers
=============
Builds the LangChain chat model and embedding model from environment variables.

Provider auto-detection priority: Groq → Azure OpenAI → OpenAI
Override with LLM_PROVIDER=groq|azure|openai to force a specific provider.

Embeddings always come from OpenAI (or Azure OpenAI when that provider is
selected): the kc_certifications.embedding column is VECTOR(1536), which
matches text-embedding-3-small. Groq has no embedding endpoint, so the groq
provider falls back to OpenAI for embeddings.
"""
import logging
import os

logger = logging.getLogger(__name__)

DEFAULT_EMBEDDING_MODEL = "text-embedding-3-small"


def detect_provider() -> str:
    """
    Return which LLM provider to use.

    Checks LLM_PROVIDER env var first (explicit override), then falls back
    to whichever API key is present in the environment.
    """
    forced = os.getenv("LLM_PROVIDER", "").lower()
    if forced in ("groq", "azure", "openai"):
        return forced
    if os.getenv("GROQ_API_KEY"):
        return "groq"
    if os.getenv("AZURE_OPENAI_API_KEY"):
        return "azure"
    return "openai"


def build_llm():
    """
    Return a LangChain chat model for the detected provider.

    Groq   → ChatGroq  (llama-3.3-70b-versatile by default)
    Azure  → AzureChatOpenAI (temperature omitted, o-series rejects it)
    OpenAI → ChatOpenAI (gpt-4o-mini by default)
    """
    provider = detect_provider()
    logger.info("[LLM] Provider: %s", provider)

    if provider == "groq":
        from langchain_groq import ChatGroq
        return ChatGroq(
            model=os.getenv("GROQ_MODEL", "llama-3.3-70b-versatile"),
            api_key=os.getenv("GROQ_API_KEY"),
            temperature=0,
        )

    if provider == "azure":
        from langchain_openai import AzureChatOpenAI
        return AzureChatOpenAI(
            azure_endpoint=os.getenv("AZURE_OPENAI_ENDPOINT"),
            azure_deployment=os.getenv("AZURE_OPENAI_DEPLOYMENT", "gpt-4o"),
            api_version=os.getenv("AZURE_OPENAI_API_VERSION", "2024-12-01-preview"),
            api_key=os.getenv("AZURE_OPENAI_API_KEY"),
        )

    from langchain_openai import ChatOpenAI
    return ChatOpenAI(
        model=os.getenv("OPENAI_MODEL", "gpt-4o-mini"),
        api_key=os.getenv("OPENAI_API_KEY"),
        temperature=0,
    )


def build_embeddings():
    """Return the embedding model used by semantic-search-supabase."""
    model = os.getenv("EMBEDDING_MODEL", DEFAULT_EMBEDDING_MODEL)

    if detect_provider() == "azure":
        from langchain_openai import AzureOpenAIEmbeddings
        return AzureOpenAIEmbeddings(
            azure_endpoint=os.getenv("AZURE_OPENAI_ENDPOINT"),
            azure_deployment=os.getenv("AZURE_OPENAI_EMBEDDING_DEPLOYMENT", model),
            api_version=os.getenv("AZURE_OPENAI_API_VERSION", "2024-12-01-preview"),
            api_key=os.getenv("AZURE_OPENAI_API_KEY"),
        )

    from langchain_openai import OpenAIEmbeddings
    logger.info("[LLM] Embeddings: %s", model)
    return OpenAIEmbeddings(model=model, api_key=os.getenv("OPENAI_API_KEY"))
