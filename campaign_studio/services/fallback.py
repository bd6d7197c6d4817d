"""Deterministic campaign copy used when the provider reports exhausted quota."""

from __future__ import annotations

from typing import List

from campaign_studio.schemas.campaign import CampaignRequest, CampaignResult

FALLBACK_HASHTAGS: List[str] = [
    "#ContentMadeEasy",
    "#AIPowered",
    "#CreatorTools",
    "#BuildYourBrand",
    "#StudentLife",
    "#WorkSmart",
    "#SocialMedia",
    "#DailyPost",
]

FALLBACK_NOTE = (
    "Fallback response used because the configured API key has insufficient "
    "quota. Replace the API key with a valid key to use live AI generation."
)


def build_fallback_result(request: CampaignRequest) -> CampaignResult:
    product = request.product_name
    description = request.description
    platform = request.platform

    brand_story = (
        f"{product} is designed for {request.audience or 'busy people'} who need more "
        "than just another product. "
        f"With {description}, it fits naturally into your daily routine and makes your "
        f"{platform} presence feel more intentional and professional."
    )
    hooks = [
        f"Why {product} is your next non-negotiable ",
        "From “I should post” to “Just posted” in seconds ",
        f"Turn your everyday {platform} posts into a brand story ",
    ]
    captions = [
        f"Tired of overthinking every {platform} post?  \n\n"
        f"Meet {product}– built for {request.audience or 'busy creators'} who want "
        "consistent, clean content without spending hours writing.  \n\n"
        f"{description}\n\n"
        "Save your energy for the work that matters. Let your content support you "
        "instead of stressing you out.",
        "If you're juggling classes, meetings, deadlines *and* content… this is for you.  \n\n"
        f"{product} helps you show up online with clarity, consistency, and a tone that "
        "actually sounds like you.  \n\n"
        f"One tool. Sharper presence. More intentional {platform} posts.",
    ]
    translated_caption_hi = (
        "अब हर पोस्ट के लिए घंटों सोचने की ज़रूरत नहीं।\n\n"
        f"{product} आपके लिए कंटेंट तैयार करने में मदद करता है ताकि आप पढ़ाई, काम और "
        "अपने सपनों पर ध्यान दे सकें – सोशल मीडिया अपने आप संभल जाए।"
    )
    translated_caption_kn = (
        "ಪ್ರತಿ ಪೋಸ್ಟ್‌ಗಾಗಿ ಗಂಟೆಗಟ್ಟಲೆ ಯೋಚಿಸುವ ದಿನಗಳು ಮುಗಿದವು\n\n"
        f"{product} ನಿಮ್ಮಗಾಗಿ ಕಂಟೆಂಟ್ ಸಿದ್ಧಪಡಿಸುತ್ತದೆ, ನೀವು ಓದು, ಕೆಲಸ ಮತ್ತು ಕನಸುಗಳ ಮೇಲೆ "
        "ಫೋಕಸ್ ಮಾಡಬಹುದು – ಸೋಷಿಯಲ್ ಮೀಡಿಯಾ ಸ್ವತಃ ಜಾಗ್ರತೆ ಪಡೆದುಕೊಳ್ಳುತ್ತದೆ."
    )

    return CampaignResult(
        tagline=f"{product or 'This product'} that keeps you going.",
        brand_story=brand_story,
        hooks=hooks,
        captions=captions,
        hashtags=list(FALLBACK_HASHTAGS),
        translated_caption_hi=translated_caption_hi,
        translated_caption_kn=translated_caption_kn,
        note=FALLBACK_NOTE,
    )
