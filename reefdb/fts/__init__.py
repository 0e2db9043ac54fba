"""Full-text search: stemming, language processing, tokenising, vectors, queries and ranking."""