"""Fixed file templates for generated Express projects."""

from __future__ import annotations

from .models import Language

__all__ = [
    "APP_TEMPLATE",
    "DOCKERFILE_TEMPLATE",
    "ENV_FILE",
    "ERROR_HANDLER",
    "ERROR_MIDDLEWARE",
    "EXPORT_LINES",
    "TSCONFIG",
]


APP_TEMPLATE = """{{ imports|block }}
const app = express();
app.use(express.json());
{{ setup|block }}
const envMode = process.env.NODE_ENV || 'development';

// Define the port from the environment variable or default to 3000
const port = process.env.PORT || 3000;

app.get('/', (req, res) => {
  res.send('Hello World');
});

// Start the server on the specified port
app.listen(port, () => {
  console.log(`Server running in ${envMode} mode on port ${port}`);
});

{{ export }}
"""

EXPORT_LINES = {
    Language.JAVASCRIPT: "module.exports = { app, envMode };",
    Language.TYPESCRIPT: "export { app, envMode };\nexport default app;",
}

ERROR_HANDLER = {
    Language.JAVASCRIPT: """class ErrorHandler extends Error {
  constructor(message, statusCode = 500) {
    super(message);
    this.statusCode = statusCode;
    Error.captureStackTrace(this, this.constructor);
  }
}

module.exports = { ErrorHandler };
""",
    Language.TYPESCRIPT: """export class ErrorHandler extends Error {
  public statusCode: number;

  constructor(message: string, statusCode: number = 500) {
    super(message);
    this.statusCode = statusCode;
    Error.captureStackTrace(this, this.constructor);
  }
}
""",
}

ERROR_MIDDLEWARE = {
    Language.JAVASCRIPT: """const { ErrorHandler } = require('../utils/errorHandler');
const { envMode } = require('../app');

/**
 * @param {ErrorHandler} err
 */
const errorMiddleware = (err, req, res, next) => {
  err.message = err.message || 'Internal Server Error';
  err.statusCode = err instanceof ErrorHandler ? err.statusCode : err.statusCode || 500;

  const response = {
    success: false,
    message: err.message,
  };

  // Include the error object while developing
  if (envMode === 'development') {
    response.error = err;
  }

  res.status(err.statusCode).json(response);
};

module.exports = errorMiddleware;
""",
    Language.TYPESCRIPT: """import { NextFunction, Request, Response } from 'express';
import { ErrorHandler } from '../utils/errorHandler';
import { envMode } from '../app';

const errorMiddleware = (err: ErrorHandler, req: Request, res: Response, next: NextFunction) => {
  err.message = err.message || 'Internal Server Error';
  err.statusCode = err.statusCode || 500;

  const response: {
    success: boolean;
    message: string;
    error?: ErrorHandler;
  } = {
    success: false,
    message: err.message,
  };

  // Include the error object while developing
  if (envMode === 'development') {
    response.error = err;
  }

  res.status(err.statusCode).json(response);
};

export default errorMiddleware;
""",
}

ENV_FILE = "PORT=3000\nNODE_ENV=development\n"

TSCONFIG = """{
  "compilerOptions": {
    "target": "ES6",
    "module": "commonjs",
    "outDir": "./dist",
    "rootDir": "./src",
    "strict": true,
    "esModuleInterop": true
  },
  "exclude": ["node_modules"]
}
"""

DOCKERFILE_TEMPLATE = """FROM node:20

# Create and set the working directory
WORKDIR /usr/src/app

# Copy package.json and package-lock.json
COPY package*.json ./

# Install dependencies
RUN npm install

# Copy the application source
COPY . .

{{ environment|block }}# Expose the application port
EXPOSE 3000

CMD ["npm", "run", "dev"]
"""
