"""User options and the crawler helpers built from them."""