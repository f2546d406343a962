from .lexer import tokenize
from .tokens import T_Number, T_String, T_Symbol, Token
