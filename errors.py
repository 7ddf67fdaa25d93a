class LexicalError(SyntaxError):
    def __init__(self, message, char=None, position=None, line=None, column=None):
        super().__init__(message)
        self.char = char
        self.position = position
        self.line = line
        self.column = column

class ParseError(SyntaxError):
    def __init__(self, message, expected=None, found=None, line=None, column=None):
        super().__init__(message)
        self.expected = expected
        self.found = found
        self.line = line
        self.column = column

class SemanticError(Exception):
    pass

class InterpreterError(Exception):
    pass

class DuplicateLabelError(InterpreterError):
    def __init__(self, label):
        super().__init__(f"Rótulo duplicado: '{label}'")
        self.label = label

class UndefinedLabelError(InterpreterError):
    def __init__(self, label):
        super().__init__(f"Rótulo não definido: '{label}'")
        self.label = label

class InfiniteLoopError(InterpreterError):
    def __init__(self, limit):
        super().__init__(f"Laço infinito detectado: limite de {limit} passos excedido")
        self.limit = limit

class TranslationError(Exception):
    def __init__(self, message, label=None):
        super().__init__(message)
        self.label = label
