"""scope_crawler.parser: разбор HTML (ссылки и каноническая разметка)."""
