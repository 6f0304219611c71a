"""
MarketLink - supermarket ordering platform
"""
