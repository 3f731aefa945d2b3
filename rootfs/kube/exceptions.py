class KubeException(Exception):
    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)


class KubeHTTPException(KubeException):
    def __init__(self, response, errmsg, *args, **kwargs):
        self.response = response

        msg = errmsg.format(*args)
        msg = 'failed to {}: {} {}'.format(
            msg,
            response.status_code,
            response.reason
        )
        detail = self.detail(response)
        if detail:
            msg = '{} ({})'.format(msg, detail)
        super().__init__(msg, **kwargs)

    @property
    def forbidden(self):
        return self.response.status_code == 403

    @staticmethod
    def detail(response):
        """Pull the human readable message out of a Kubernetes Status body."""
        try:
            data = response.json()
        except ValueError:
            return response.text.strip()
        if isinstance(data, dict):
            return data.get('message', '')
        return ''
