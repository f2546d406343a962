from .compiler import WordCompiler, find_branches, find_definition
