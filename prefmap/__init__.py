"""prefmap — choropleth maps of Japan's prefectures over HTTP."""

__version__ = "0.1.0"
