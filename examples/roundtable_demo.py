"""Minimal demonstration of a roundtable call."""

from roundtable_core.api.service import dispatch_chat

if __name__ == "__main__":
    status, body = dispatch_chat({"message": "What makes a good cup of coffee?", "conversation": []})
    print("Status:", status)
    for bot in body.get("botMessages", []):
        print(f"{bot['name']}: {bot['content']}")
