from nslisp.reader.parser import lex, parse, TokenStream
