from core.models import FeedSource

CATEGORIES = ("india", "telangana", "andhra", "business", "sports", "tech", "politics")

FEEDS = [
    # India general
    FeedSource("https://feeds.feedburner.com/ndtvnews-top-stories", "india", "NDTV"),
    FeedSource("https://timesofindia.indiatimes.com/rssfeedstopstories.cms", "india", "Times of India"),
    FeedSource("https://www.hindustantimes.com/feeds/rss/india-news/rssfeed.xml", "india", "Hindustan Times"),
    FeedSource("https://www.thehindu.com/news/national/?service=rss", "india", "The Hindu"),
    FeedSource("https://feeds.feedburner.com/ndtvnews-india-news", "india", "NDTV India"),
    FeedSource("https://www.indiatoday.in/rss/1206578", "india", "India Today"),

    # Telugu sources, no translation needed
    FeedSource("https://www.eenadu.net/rss/telangana-news.xml", "telangana", "Eenadu", "te"),
    FeedSource("https://www.sakshi.com/rss.xml", "telangana", "Sakshi", "te"),
    FeedSource("https://www.andhrajyothy.com/rss", "andhra", "Andhra Jyothy", "te"),

    # Business
    FeedSource("https://economictimes.indiatimes.com/rssfeedsdefault.cms", "business", "Economic Times"),
    FeedSource("https://www.moneycontrol.com/rss/latestnews.xml", "business", "Moneycontrol"),
    FeedSource("https://www.livemint.com/rss/news", "business", "LiveMint"),

    # Sports
    FeedSource("https://www.espncricinfo.com/rss/content/story/feeds/0.xml", "sports", "ESPNCricinfo"),
    FeedSource("https://sportstar.thehindu.com/cricket/?service=rss", "sports", "Sportstar"),

    # Tech
    FeedSource("https://yourstory.com/feed", "tech", "YourStory"),
    FeedSource("https://inc42.com/feed/", "tech", "Inc42"),

    # Politics
    FeedSource("https://feeds.feedburner.com/ndtvnews-politics-news", "politics", "NDTV Politics"),

    # Regional coverage in English
    FeedSource("https://www.thehindu.com/news/national/andhra-pradesh/?service=rss", "andhra", "The Hindu AP"),
    FeedSource("https://www.thehindu.com/news/national/telangana/?service=rss", "telangana", "The Hindu Telangana"),
]
