class ClassifierAdapter:
    async def classify(self, image):
        """
        Send one ImageFile to the classification service and return a
        ClassificationResult. Raises TransportFailure or ServiceError.
        """
        raise NotImplementedError

    async def aclose(self) -> None:
        return None
