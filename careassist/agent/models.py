"""Model factory for LangChain ChatOllama instances."""

from langchain_ollama import ChatOllama

from careassist.config import Settings


def get_chat_model(settings: Settings) -> ChatOllama:
    return ChatOllama(
        model=settings.chat_model,
        base_url=settings.ollama_host,
        client_kwargs={"timeout": settings.request_timeout_seconds},
    )


def get_stream_model(settings: Settings) -> ChatOllama:
    return ChatOllama(
        model=settings.stream_model,
        base_url=settings.ollama_host,
        temperature=settings.stream_temperature,
        top_k=settings.stream_top_k,
        top_p=settings.stream_top_p,
        num_ctx=settings.stream_num_ctx,
        repeat_penalty=settings.stream_repeat_penalty,
        client_kwargs={"timeout": settings.request_timeout_seconds},
    )
