"""The main entry point to the pylox package.

Lox
    Interprets code from a file or string
"""
import logging
import sys
from typing import List, MutableMapping, Optional
from typing import TypedDict, Callable as function

from pylox import builtin, lang

from pylox import scanner, parser
from pylox.reporter import Reporter
from pylox.resolver import Resolver
from pylox.interpreter import Interpreter

logger = logging.getLogger(__name__)



class Result(TypedDict):
    """The outcome of running a piece of code"""
    env: lang.Environment  # The global environment used by the interpreter
    errors: List[builtin.LoxError]  # Errors reported while running
    failed: bool  # True if pylox itself failed while running


__version__ = '0.3.0'
VERSION = f"pylox {__version__}"
LOGFILE = 'pylox.log'
HELP = """usage: pylox [option] [file]
Options and arguments:
-h     : print this help message and exit (also --help)
file   : program read from script file
         (starts an interactive prompt if omitted)
""".strip()

# Exit codes
# https://gist.github.com/bojanrajkovic/831993
EX_OK = 0
EX_USAGE = 64  # command line usage error
EX_DATAERR = 65  # data format error
EX_NOINPUT = 66  # cannot open input
EX_SOFTWARE = 70  # internal software error


def logException(msg="Unexpected error has occurred") -> None:
    """Helper function that logs unexpected (Python) exceptions.
    If logException is invoked, it means pylox has encountered an error
    it should not have. If pylox is bug-free, logException should never
    be invoked at all.
    """
    # https://docs.python.org/3.8/library/logging.html#logging.Logger.exception
    logger.exception(msg)
    print("pylox ERROR: " + msg, file=sys.stderr)
    print(f"The details of this error have been logged in {LOGFILE}.",
          file=sys.stderr)

def fail(result: Result, msg="Unexpected error has occurred") -> Result:
    """Logs the exception being handled and marks result as failed."""
    logException(msg)
    result['failed'] = True
    return result

def report(err: builtin.LoxError) -> None:
    """The default error handler: writes err to stderr."""
    print(err.report(), file=sys.stderr)

def hadError(result: Result) -> bool:
    """Returns True if a scan, parse or resolution error occurred."""
    return any(
        isinstance(err, (builtin.ParseError, builtin.LogicError))
        for err in result['errors']
    )

def hadRuntimeError(result: Result) -> bool:
    return any(
        isinstance(err, builtin.RuntimeError) for err in result['errors']
    )

def exitCode(result: Result) -> int:
    if result['failed']:
        return EX_SOFTWARE
    if hadError(result):
        return EX_DATAERR
    if hadRuntimeError(result):
        return EX_SOFTWARE
    return EX_OK


class Lox:
    """A Lox interpreter.

    Lox encapsulates the pipelines of the code interpreting process:
    1. Scanning
       The code string is tokenised into a sequence of tokens.
    2. Parsing
       Tokens are parsed into a sequence of Statements, which can in turn
       contain Expressions.
    3. Resolving
       Local variable references are resolved to the number of scopes
       between each reference and its declaration.
    4. Interpreting
       Expressions are evaluated to retrieve values, and statements are
       executed to invoke their effects.

    Each stage runs only if the previous stages reported no errors.
    The global environment persists across calls to run().
    """

    def __init__(self) -> None:
        self.env = lang.Environment()
        self.handlers: MutableMapping[str, function] = {
            'output': print,
            'error': report,
        }

    def registerHandlers(self, **kwargs: function) -> None:
        """Lox may register custom handlers e.g. for testing purposes.
        Handlers are registered using a str key.

        The following handlers are currently supported:
        - output(text)
        - error(err)
        """
        for key, handler in kwargs.items():
            if key not in self.handlers:
                raise KeyError(f"Invalid handler key {repr(key)}")
            self.handlers[key] = handler

    def runFile(self, srcfile: str) -> Result:
        """Executes code from the file with the provided srcfile path.
        """
        with open(srcfile, 'r') as f:
            src = f.read()
        return self.run(src)

    def run(self, src: str) -> Result:
        """Executes code represented by the src string."""
        reporter = Reporter(self.handlers['error'])
        result: Result = {
            'env': self.env,
            'errors': reporter.errors,
            'failed': False,
        }

        # Parsing
        try:
            tokens = scanner.scan(src, reporter)
            statements = parser.parse(tokens, reporter)
        except RecursionError:
            return fail(result, "Program nested too deeply")
        except Exception:
            return fail(result)
        if reporter:
            return result

        # Resolving
        resolver = Resolver(statements, reporter)
        try:
            locals = resolver.inspect()
        except RecursionError:
            return fail(result, "Program nested too deeply")
        except Exception:
            return fail(result)
        if reporter:
            return result

        # Interpreting
        interpreter = Interpreter(self.env, statements, locals)
        interpreter.registerOutputHandler(self.handlers['output'])
        try:
            interpreter.interpret()
        except builtin.RuntimeError as err:
            reporter.report(err)
        except RecursionError:
            fail(result, "Program nested too deeply")
        except Exception:
            fail(result)
        return result



def repl(lox: Lox) -> None:
    """Reads and runs one line at a time until end of input.
    Errors are reported but never end the session.
    """
    print(VERSION)
    while True:
        try:
            line = input('> ')
        except EOFError:
            print()
            break
        lox.run(line)

def main(argv: Optional[List[str]] = None) -> None:
    """This is the entry point which shell scripts should invoke.

    It encapsulates the following invocation modes:
    1. REPL mode
    2. Script mode
    """
    if argv is None:
        argv = sys.argv[1:]
    logging.basicConfig(
        filename=LOGFILE,
        filemode='w',
        format='%(name)s - %(levelname)s - %(message)s',
    )

    # Argument handling
    if len(argv) > 1:
        print(HELP)
        sys.exit(EX_USAGE)
    if argv and argv[0] in ('-h', '--help'):
        print(HELP)
        sys.exit(EX_OK)
    elif argv and argv[0].startswith('-'):
        print(f"Unknown option: {argv[0]}")
        print("Try `pylox -h' for more information.")
        sys.exit(EX_USAGE)

    # REPL mode
    if not argv:
        repl(Lox())
        sys.exit(EX_OK)

    # Script mode
    srcfile = argv[0]
    lox = Lox()
    try:
        result = lox.runFile(srcfile)
    except OSError as error:
        print(f"pylox: can't open file {srcfile!r}:")
        print(error)
        sys.exit(EX_NOINPUT)
    sys.exit(exitCode(result))
