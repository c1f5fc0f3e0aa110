from .similarity import similarity
from .sentences import extract_sentences, clean_sentences, extract_json
from .catalog import GoogleBooksCatalog, rank_candidates, find_best_match
from .filters import contains_profanity
