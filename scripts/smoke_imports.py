from chat_relay.document_loader import FileDocumentLoader
from chat_relay.matching import MatchEngine, segment


if __name__ == "__main__":
    loader = FileDocumentLoader("data/faq.txt")
    engine = MatchEngine(loader)
    queries = ["hours", "contact", "refunds", "quantum physics"]
    print(
        {
            "entries": len(segment(loader.extract_text())),
            "replies": {query: engine.resolve(query).reply for query in queries},
        }
    )
