# Constants for the recommendation resolver.
RECO_LIMIT = 4  # Hard cap on recommendations per result

# Result messages, one per fallback step
MSG_AI = "AI-powered recommendations"
MSG_CATEGORY = "Category-based recommendations - AI service unavailable"
MSG_RANDOM = "Random recommendations - AI service unavailable"
MSG_POPULAR = "Popular products - No user history available"

# Static (demo) results, named after the missing dependency
MSG_AI_NOT_CONFIGURED = "Demo recommendations - Gemini API not configured"
MSG_DB_NOT_AVAILABLE = "Demo recommendations - Database not available"
MSG_DB_CONNECTION_FAILED = "Demo recommendations - Database connection failed"
MSG_NO_PRODUCTS = "Demo recommendations - No products in database"
MSG_SERVICE_UNAVAILABLE = "Fallback recommendations - Service temporarily unavailable"

# AI ranker
AI_MAX_TOKENS = 128
AI_CHECK_PROMPT = "Hello, this is a test. Please respond with 'API key is working'."
