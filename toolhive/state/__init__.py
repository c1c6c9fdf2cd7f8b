"""Storage for named state on the local filesystem."""