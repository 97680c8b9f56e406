from psi.reader.parser import Cursor, parse, parse_all, read
from psi.reader.syntax_check import balanced_parens
