def capture(captureType):
    """
    Returns functions for data capture and retrieval.

    Arguments
    ---------
    - captureType: str
        The type of capture-return function pair to return:
        'output' captures printed text, 'error' captures reported errors

    Return
    ------
    capture(), return()
    """
    storage = {'data': None}

    def captureOutput(
        *objects,
        sep=' ',
        end='\n',
        **_,
    ):
        """
        Captures output into a storage object.
        Can be used interchangeably with Python's built-in print().
        """
        outputstr = sep.join([str(obj) for obj in objects]) + end
        storage['data'] += outputstr

    def captureError(err):
        """Captures reported errors into a storage object."""
        storage['data'] += [err]

    def returnData():
        """Returns the captured data"""
        return storage['data']

    if captureType == 'output':
        storage['data'] = ''
        return captureOutput, returnData
    if captureType == 'error':
        storage['data'] = []
        return captureError, returnData
    raise ValueError(f"Invalid capture type {captureType!r}")


def run(src, lox=None):
    """Runs src with captured handlers.
    Returns the Result, with captured 'output' and 'reported' errors
    added.
    """
    import pylox

    if lox is None:
        lox = pylox.Lox()
    captureOutput, returnOutput = capture('output')
    captureError, returnErrors = capture('error')
    lox.registerHandlers(
        output=captureOutput,
        error=captureError,
    )
    result = lox.run(src)
    result['output'] = returnOutput()
    result['reported'] = returnErrors()
    return result
