class MediaToolError(RuntimeError):
    """An external media tool (downloader or transcoder) failed."""


class FetchError(MediaToolError):
    pass


class CutError(MediaToolError):
    pass


class JobExistsError(KeyError):
    pass
