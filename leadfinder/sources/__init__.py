from leadfinder.sources.apollo import ApolloSource
from leadfinder.sources.fiverr import FiverrSource
from leadfinder.sources.google import GoogleSource
from leadfinder.sources.job_board import JobBoardSource
from leadfinder.sources.reddit import RedditSource

__all__ = [
    "RedditSource",
    "FiverrSource",
    "JobBoardSource",
    "GoogleSource",
    "ApolloSource",
]
