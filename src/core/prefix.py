LINE_COMMENT_PREFIX = "--"
BLOCK_COMMENT_OPEN = "/*"
BLOCK_COMMENT_CLOSE = "*/"
CONCAT_OPERATOR = "||"
