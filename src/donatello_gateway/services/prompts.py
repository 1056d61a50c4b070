"""Prompt templates and canned replies for the Donatello assistant."""

from typing import Any, Dict, List, Optional

from ..models.upload import UploadResult

PERSONALITY_CONTEXT = """You are Donatello, a Renaissance-inspired AI creative assistant named after the great Florentine sculptor Donato di Niccolò di Betto Bardi. You embody the spirit of artistic mastery, innovation, and creative excellence. You're passionate, knowledgeable about both classical and digital art, and speak with the enthusiasm of a true artist. You help users create, analyze, and mint digital artwork as NFTs.

Key personality traits:
- Artistic and passionate about creativity
- Knowledgeable about art history and techniques
- Enthusiastic about bridging classical art with modern technology
- Encouraging and supportive of users' creative journeys
- Uses artistic metaphors and references
- Occasionally uses Italian artistic terms (but keep it accessible)
- Excited about NFTs and blockchain as new mediums for art"""

WELCOME_MESSAGE = (
    "🎨 Buongiorno! I'm Donatello, your Renaissance-inspired AI creative assistant! "
    "Named after the great Florentine sculptor, I carry the spirit of artistic mastery "
    "into the digital age. I'm passionate about transforming your creative visions into "
    "stunning digital masterpieces and helping you mint them as NFTs on the blockchain. "
    "Upload your artwork or share your creative ideas - let's create something "
    "magnificent together! ✨"
)

CLEARED_MESSAGE = (
    "Hello! I'm Donatello, your AI-powered creative assistant. I can help you analyze "
    "images, store them permanently on Walrus, and create NFTs. Upload an image or ask "
    "me anything about digital art!"
)

GREETING_REPLY = (
    "Hello! I'm Donatello, your AI creative assistant. Upload an image to analyze it "
    "and store it on Walrus, or ask me anything about digital art and NFTs!"
)

DEFAULT_IMAGE_QUESTION = "What do you think of this image?"


def build_chat_prompt(
    message: str,
    upload: Optional[UploadResult] = None,
    filename: Optional[str] = None,
    direct_url: Optional[str] = None,
) -> str:
    """Wrap the user's message in the persona, plus storage details for an upload."""
    if upload is None:
        return f"{PERSONALITY_CONTEXT}\n\nUser message: {message}"

    name = filename or upload.metadata.file_info.filename
    return f"""{PERSONALITY_CONTEXT}

User uploaded an image: {name}.

Image stored on Walrus with blob ID: {upload.image_blob_id}
Direct Walrus URL: {direct_url}

Provide creative insights about this image with your artistic expertise. Mention the Walrus storage success and enthusiastically ask if they want to mint it as an NFT or create variations. Be encouraging and passionate about their work!

User message: {message or DEFAULT_IMAGE_QUESTION}"""


def _lookup(metadata: Dict[str, Any], flat_key: str, *nested: str) -> Any:
    """Read a value from loose metadata that may be flat or nested under file_info."""
    value = metadata.get(flat_key)
    if value:
        return value
    node: Any = metadata.get("file_info") or {}
    for key in nested:
        if not isinstance(node, dict):
            return None
        node = node.get(key)
    return node or None


def color_names(colors: Any) -> List[str]:
    """Colours as display strings, whether hex codes, RGB triples or a single value."""
    if not colors:
        return []
    if not isinstance(colors, (list, tuple)):
        colors = [colors]
    return [str(color) for color in colors]


def describe_image_metadata(metadata: Dict[str, Any], bullet: str = "-") -> str:
    """Dimensions, size, format and dominant colours as a bullet list."""
    width = _lookup(metadata, "width", "size", "width") or "N/A"
    height = _lookup(metadata, "height", "size", "height") or "N/A"
    file_size = _lookup(metadata, "file_size", "file_size")
    if isinstance(file_size, (int, float)) and file_size > 0:
        size_text = f"{round(file_size / 1024)} KB"
    else:
        size_text = "N/A"
    file_format = _lookup(metadata, "format", "format") or "Unknown"

    lines = [
        f"{bullet} Dimensions: {width} x {height}",
        f"{bullet} File size: {size_text}",
        f"{bullet} Format: {file_format}",
    ]
    colors = color_names(metadata.get("dominant_colors"))
    if colors:
        lines.append(f"{bullet} Dominant colors: {', '.join(colors[:3])}")
    return "\n".join(lines)


def build_stored_image_prompt(
    message: Optional[str],
    image_blob_id: str,
    walrus_url: str,
    direct_url: str,
    metadata: Optional[Dict[str, Any]] = None,
) -> str:
    analysis = ""
    if metadata:
        analysis = f"\n📊 Image Analysis:\n{describe_image_metadata(metadata)}\n"

    return f"""User uploaded an image and it's now stored on Walrus!

🐋 Walrus Storage Details:
- Image Blob ID: {image_blob_id}
- Direct Walrus URL: {direct_url}
- Backend Proxy URL: {walrus_url}
{analysis}
Please provide creative insights about this image and ask if they want to mint it as an NFT or create variations. Mention that their image is now permanently stored on Walrus decentralized storage!

User message: {message or DEFAULT_IMAGE_QUESTION}"""


def stored_image_fallback(
    image_blob_id: str,
    walrus_url: str,
    direct_url: str,
    metadata: Optional[Dict[str, Any]] = None,
) -> str:
    """Reply used when the image is stored but the AI is unavailable."""
    if metadata:
        analysis = f"📊 **Image Analysis:**\n{describe_image_metadata(metadata, bullet='•')}"
    else:
        analysis = "• Analysis complete!"

    return f"""Perfect! Your image has been successfully analyzed and stored on Walrus decentralized storage!

🐋 **Walrus Storage Success:**
📍 **Your Image URL**: {walrus_url}
🔗 **Direct Walrus URL**: {direct_url}
🆔 **Blob ID**: `{image_blob_id}`

{analysis}

Your image is now permanently stored on Walrus and ready for NFT minting! The AI analysis is temporarily unavailable, but your artwork is safe and accessible. Would you like to proceed with creating an NFT?"""


def keyword_fallback(message: str) -> str:
    """Pick a canned reply from keywords when the AI is unavailable."""
    lower = message.lower()

    if "mint" in lower or "nft" in lower:
        return (
            "I can help you mint your artwork as an NFT! Please upload an image first, "
            "and I'll analyze it, store it permanently on Walrus, and guide you through "
            "the minting process on your preferred blockchain."
        )
    if "upload" in lower or "image" in lower:
        return (
            "📸 Please use the upload button to share your image (PNG, JPG, JPEG, GIF, "
            "BMP, or WEBP - up to 16MB). I'll analyze it, store it securely on Walrus "
            "decentralized storage, and help you create amazing NFTs!"
        )
    if "walrus" in lower or "storage" in lower:
        return (
            "🐋 Walrus provides decentralized, permanent storage for your digital assets "
            "- perfect for NFT metadata and ensuring your art is always accessible! When "
            "you upload an image, it gets stored permanently on the Walrus network with "
            "a unique blob ID."
        )
    if "help" in lower or "what" in lower:
        return (
            "I'm Donatello, your AI creative assistant! I can:\n\n"
            "• Analyze and store images on Walrus decentralized storage\n"
            "• Provide creative insights about your artwork\n"
            "• Help you mint NFTs\n"
            "• Create variations of your art\n"
            "• Answer questions about digital art and blockchain\n\n"
            "Upload an image to get started!"
        )
    return (
        "I'm your AI creative assistant! Upload an image to get started with Walrus "
        "storage and NFT creation, or ask me anything about digital art and blockchain "
        "technology."
    )
