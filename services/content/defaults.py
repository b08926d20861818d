"""
Compiled-in default site content

The public site always has something to render: these values are the
snapshot before the first remote load and the fallback for every section
the remote document does not provide.
"""

import copy
from typing import Any, Dict

from schemas.site_content import SiteContent


DEFAULT_CONTENT: Dict[str, Any] = {
    "hero": {
        "headline": "Full Power, No Shaur. Jaipur's Stories On Screen.",
        "description": (
            "Dive into the creators redefining Rajasthan's voice. From food trails to festival nights, "
            "JaipurTV brings the Pink City to the world across YouTube, Instagram, and beyond."
        ),
        "primaryCtaLabel": "Watch Latest Videos",
        "primaryCtaLink": "https://www.youtube.com/@jaipurtv",
        "secondaryCtaLabel": "Join the Community",
        "secondaryCtaLink": "https://www.instagram.com/moinjaipurtv/",
        "trendingBadge": "Trending Now on JaipurTV",
        "stats": [
            {"value": "100K+", "label": "Subscribers"},
            {"value": "500+", "label": "Videos Published"},
            {"value": "10M+", "label": "Lifetime Views"},
        ],
    },
    "videos": [
        {
            "id": "dQw4w9WgXcQ",
            "title": "Jaipur City Tour 2024",
            "views": "125K",
            "duration": "12:45",
            "type": "video",
            "category": "Travel",
            "url": "https://www.youtube.com/watch?v=dQw4w9WgXcQ",
        },
        {
            "id": "dQw4w9WgXcQ",
            "title": "Street Food of Jaipur",
            "views": "98K",
            "duration": "15:20",
            "type": "video",
            "category": "Food",
            "url": "https://www.youtube.com/watch?v=dQw4w9WgXcQ",
        },
        {
            "id": "dQw4w9WgXcQ",
            "title": "Jaipur Culture & Heritage",
            "views": "156K",
            "duration": "18:30",
            "type": "video",
            "category": "Culture",
            "url": "https://www.youtube.com/watch?v=dQw4w9WgXcQ",
        },
    ],
    "shorts": [
        {
            "id": "dQw4w9WgXcQ",
            "title": "Hawa Mahal in 60 seconds",
            "views": "203K",
            "duration": "0:58",
            "type": "short",
            "category": "Travel",
            "url": "https://www.youtube.com/shorts/dQw4w9WgXcQ",
        },
        {
            "id": "dQw4w9WgXcQ",
            "title": "Jaipur Street Food Quick Bite",
            "views": "142K",
            "duration": "0:45",
            "type": "short",
            "category": "Food",
            "url": "https://www.youtube.com/shorts/dQw4w9WgXcQ",
        },
        {
            "id": "dQw4w9WgXcQ",
            "title": "Traditional Dance Performance",
            "views": "178K",
            "duration": "0:52",
            "type": "short",
            "category": "Culture",
            "url": "https://www.youtube.com/shorts/dQw4w9WgXcQ",
        },
    ],
    "reels": [
        {
            "id": "1",
            "url": "https://www.instagram.com/p/example1/",
            "thumbnail": "https://images.unsplash.com/photo-1524492412937-b28074a5d7da?w=800",
            "caption": "Exploring the Pink City 🌸 #JaipurTV",
            "likes": "15K",
            "comments": "234",
            "username": "moinjaipurtv",
            "category": "Travel",
        },
        {
            "id": "2",
            "url": "https://www.instagram.com/p/example2/",
            "thumbnail": "https://images.unsplash.com/photo-1596797038530-2c107229654b?w=800",
            "caption": "Best street food in Jaipur 🍛",
            "likes": "12K",
            "comments": "189",
            "username": "sameer4ukhan",
            "category": "Food",
        },
        {
            "id": "3",
            "url": "https://www.instagram.com/p/example3/",
            "thumbnail": "https://images.unsplash.com/photo-1599661046289-e31897846e41?w=800",
            "caption": "Traditional Rajasthani culture 🎭",
            "likes": "18K",
            "comments": "312",
            "username": "moinjaipurtv",
            "category": "Culture",
        },
    ],
    "gallery": [
        {
            "id": "g-1",
            "type": "image",
            "title": "Sunrise at Amer Fort",
            "description": "Morning glow over Amer Fort captured during a shoot.",
            "imageUrl": "https://images.unsplash.com/photo-1505761671935-60b3a7427bad?w=1200",
            "sourceUrl": "https://instagram.com/p/example1",
            "likes": "12.4K",
            "comments": "312",
            "category": "Travel",
            "featured": True,
            "publishedAt": "2024-01-18",
        },
        {
            "id": "g-2",
            "type": "image",
            "title": "Rajasthani Cuisine",
            "description": "Behind the scenes tasting session with Jaipur's best chefs.",
            "imageUrl": "https://images.unsplash.com/photo-1589308078059-be1415eab4c3?w=1200",
            "sourceUrl": "https://instagram.com/p/example2",
            "likes": "18.1K",
            "comments": "842",
            "category": "Food",
            "featured": False,
            "publishedAt": "2024-01-10",
        },
        {
            "id": "g-3",
            "type": "video",
            "title": "Behind the Lens: City Night Shoot",
            "description": "A quick cut of our nighttime shoot across the Pink City skyline.",
            "imageUrl": "https://images.unsplash.com/photo-1533105079780-92b9be482077?w=1200",
            "videoUrl": "https://www.youtube.com/watch?v=dQw4w9WgXcQ",
            "sourceUrl": "https://www.youtube.com/watch?v=dQw4w9WgXcQ",
            "likes": "22K",
            "comments": "1.1K",
            "category": "Behind the Scenes",
            "featured": True,
            "publishedAt": "2024-02-02",
        },
    ],
    "posts": [
        {
            "id": "p-1",
            "title": "Behind JaipurTV: Filming the Pink City",
            "slug": "behind-jaipurtv-filming-the-pink-city",
            "excerpt": "How we storyboard, shoot, and edit every episode to capture Jaipur's spirit.",
            "content": "# Behind JaipurTV\nWe plan each episode with local stories in mind...",
            "status": "published",
            "publishedAt": "2024-01-05",
            "tags": ["jaipur", "production", "storytelling"],
        },
        {
            "id": "p-2",
            "title": "Top 5 Hidden Gems to Visit",
            "slug": "top-5-hidden-gems",
            "excerpt": "Our must-see spots beyond the usual tourist circuit.",
            "content": "Discover quiet courtyards, artisan workshops, and late-night eateries...",
            "status": "draft",
            "tags": ["travel", "guide"],
        },
    ],
    "users": [
        {
            "id": "u-1",
            "name": "Sameer Khan",
            "email": "sameer@jaipurtv.com",
            "role": "Owner",
            "status": "active",
            "lastLogin": "2025-10-15T09:00:00+05:30",
        },
        {
            "id": "u-2",
            "name": "Moin Khan",
            "email": "moin@jaipurtv.com",
            "role": "Owner",
            "status": "active",
            "lastLogin": "2025-10-18T14:30:00+05:30",
        },
        {
            "id": "u-3",
            "name": "Aditi Sharma",
            "email": "aditi@jaipurtv.com",
            "role": "Editor",
            "status": "invited",
        },
    ],
    "contact": {
        "heroTitle": "Get in Touch",
        "heroHighlight": "We'd love to hear from you!",
        "heroDescription": "Drop us a line or follow us on social media.",
        "emailLabel": "Email",
        "emailAddress": "hello@jaipurtv.com",
        "locationLabel": "Location",
        "locationLine1": "Jaipur, Rajasthan",
        "locationLine2": "India",
        "businessLabel": "Business",
        "businessNote": "For collaborations and business inquiries, please email us.",
        "phoneLabel": "Phone",
        "phoneNumber": "+91 1234567890",
        "followLabel": "Follow us",
        "followNote": "Stay updated on our latest content and behind-the-scenes stories.",
    },
    "settings": {
        "theme": {
            "primaryColor": "#f973ab",
            "accentColor": "#facc15",
            "backgroundStyle": "gradient",
        },
        "branding": {
            "logoPath": "/jaipurtv-logo.png",
            "faviconPath": "/favicon.png",
        },
        "socials": {
            "youtube": "https://www.youtube.com/@jaipurtv",
            "instagramOne": "https://www.instagram.com/moinjaipurtv/",
            "instagramTwo": "https://www.instagram.com/sameer4ukhan/",
            "shortsPlaylistId": "UUSHuiKWS36eKqAoW2sxVxtScA",
            "uploadsPlaylistId": "UUuiKWS36eKqAoW2sxVxtScA",
        },
        "newsletter": {
            "provider": "Mailchimp",
            "signupLink": "https://mailchi.mp/jaipurtv/signup",
        },
    },
    "integrations": {
        "youtubeApiKey": "",
        "youtubeChannelId": "UC-example",
        "instagramAccessToken": "",
        "emailProviderApiKey": "",
        "lastSyncedAt": "2025-10-01T10:00:00+05:30",
    },
}

_DEFAULT_SITE_CONTENT = SiteContent.model_validate(DEFAULT_CONTENT)


def default_site_content() -> SiteContent:
    """Fresh copy of the bundled default document"""
    return _DEFAULT_SITE_CONTENT.model_copy(deep=True)


def default_content_mapping() -> Dict[str, Any]:
    """Raw camelCase form of the defaults"""
    return copy.deepcopy(DEFAULT_CONTENT)
