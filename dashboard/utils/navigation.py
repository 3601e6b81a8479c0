class NavigationRedirect(Exception):
    """Raised by an action to send the user to ``location``.

    Nothing after the ``raise`` runs. The application turns the signal into
    an HTTP redirect; JSON handlers catch it and report the location.
    """

    def __init__(self, location: str):
        super().__init__(location)
        self.location = location


def navigate(location: str):
    raise NavigationRedirect(location)
