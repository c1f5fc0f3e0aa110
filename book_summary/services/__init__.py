from .llm import TextGenerator
from .structured import request_structured_summary, request_text_summary
from .reconcile import reconcile
