import argparse
import logging

from book_summary.config import load_settings

# ---------- Logging ----------
logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")
log = logging.getLogger("book-summary")

# ---------- CLI ----------
def run_cli(title: str, style: str, num: int | None):
    from book_summary.api import build_context
    from book_summary.pipeline import summarize_book

    ctx = build_context(load_settings())
    res = summarize_book(title, style, num, ctx)

    if res.error:
        print(f"Error: {res.error}")
        return 1
    if res.corrected_title:
        print(f"📚 {res.corrected_title}\n")
    print(res.intro)
    if res.summary:
        print("\n" + res.summary)
    return 0 if res.found else 1

# ---------- Server ----------
def run_server(port: int | None):
    import uvicorn

    settings = load_settings()
    uvicorn.run("book_summary.api:create_app", factory=True, host="0.0.0.0", port=port or settings.port)
    return 0

# ---------- Entrypoint ----------
def main(argv=None):
    parser = argparse.ArgumentParser(description="Book Summary: catalog lookup + N-sentence LLM summary")
    parser.add_argument("title", nargs="?", help="Book title to summarize")
    parser.add_argument("--style", default="", help="Free-text tone/style instruction")
    parser.add_argument("--num", type=int, default=None, help="Number of summary sentences (1-70)")
    parser.add_argument("--serve", action="store_true", help="Start the HTTP server")
    parser.add_argument("--port", type=int, default=None, help="Port for --serve (default: $PORT or 10000)")
    args = parser.parse_args(argv)

    if args.serve:
        return run_server(args.port)
    if not args.title:
        parser.error("a title is required unless --serve is given")
    return run_cli(args.title, args.style, args.num)

if __name__ == "__main__":
    raise SystemExit(main())
