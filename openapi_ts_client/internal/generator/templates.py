class Templates:
    """Шаблоны генерируемого TypeScript клиента"""

    runtime = """/**
 * Auto-generated type-safe API client
 * Generated from OpenAPI specification, do not edit by hand.
 *
 * Every method returns an ApiResult: check result._tag before using the data.
 */

export type ApiError<TStatus extends number = number> = {
  readonly _tag: 'ApiError';
  readonly status: TStatus;
  readonly message: string;
  readonly data?: unknown;
};

export type ApiSuccess<TData> = {
  readonly _tag: 'Success';
  readonly data: TData;
};

export type ApiResult<TData, TStatus extends number = number> =
  | ApiSuccess<TData>
  | ApiError<TStatus>;

export type RequestInterceptor = (request: RequestInit) => RequestInit | Promise<RequestInit>;

export type ResponseInterceptor<T = unknown> = (response: Response, data: T) => T | Promise<T>;

export class HttpError extends Error {
  readonly status: number;
  readonly data: unknown;

  constructor(status: number, message: string, data?: unknown) {
    super(message);
    this.name = 'HttpError';
    this.status = status;
    this.data = data;
  }
}

function formatValue(value: unknown): string {
  return typeof value === 'object' ? JSON.stringify(value) : String(value);
}

function buildQuery(query: Record<string, unknown>): string {
  const searchParams = new URLSearchParams();
  for (const [key, value] of Object.entries(query)) {
    if (value === undefined || value === null) continue;
    const items = Array.isArray(value) ? value : [value];
    for (const item of items) {
      if (item !== undefined && item !== null) searchParams.append(key, formatValue(item));
    }
  }
  const queryString = searchParams.toString();
  return queryString ? `?${queryString}` : '';
}

function toHeaderRecord(headers: Record<string, unknown>): Record<string, string> {
  const result: Record<string, string> = {};
  for (const [key, value] of Object.entries(headers)) {
    if (value !== undefined && value !== null) result[key] = formatValue(value);
  }
  return result;
}

function toCookieHeader(cookies: Record<string, unknown>): string {
  return Object.entries(cookies)
    .filter(([, value]) => value !== undefined && value !== null)
    .map(([key, value]) => `${key}=${encodeURIComponent(formatValue(value))}`)
    .join('; ');
}

function sleep(ms: number): Promise<void> {
  return new Promise((resolve) => setTimeout(resolve, ms));
}"""

    client_class_open = """export class {class_name} {{
  private baseUrl: string = {base_url};
  private apiKey?: string;
  private bearerToken?: string;
  private requestInterceptors: RequestInterceptor[] = [];
  private responseInterceptors: ResponseInterceptor[] = [];
  private maxRetries: number = 3;
  private retryDelay: number = 1000;

  constructor(config?: {{
    baseUrl?: string;
    apiKey?: string;
    bearerToken?: string;
    maxRetries?: number;
  }}) {{
    if (config?.baseUrl) this.baseUrl = config.baseUrl;
    if (config?.apiKey) this.apiKey = config.apiKey;
    if (config?.bearerToken) this.bearerToken = config.bearerToken;
    if (config?.maxRetries !== undefined) this.maxRetries = config.maxRetries;
  }}"""

    client_runtime_methods = """  /**
   * Set API key, sent as the X-API-Key header
   */
  setApiKey(apiKey: string): void {
    this.apiKey = apiKey;
  }

  /**
   * Set Bearer token, sent as the Authorization header
   */
  setBearerToken(token: string): void {
    this.bearerToken = token;
  }

  /**
   * Add a request interceptor, interceptors run in registration order
   */
  addRequestInterceptor(interceptor: RequestInterceptor): void {
    this.requestInterceptors.push(interceptor);
  }

  /**
   * Add a response interceptor, interceptors run in registration order
   */
  addResponseInterceptor<T>(interceptor: ResponseInterceptor<T>): void {
    this.responseInterceptors.push(interceptor as ResponseInterceptor);
  }

  /**
   * Set retry configuration, the delay doubles on every attempt
   */
  setRetryConfig(maxRetries: number, delay: number = 1000): void {
    this.maxRetries = maxRetries;
    this.retryDelay = delay;
  }

  private async internalFetch<T>(url: string, options: RequestInit = {}): Promise<T> {
    const headers: Record<string, string> = {
      'Content-Type': 'application/json',
      ...(options.headers as Record<string, string> | undefined),
    };
    if (this.apiKey) headers['X-API-Key'] = this.apiKey;
    if (this.bearerToken) headers['Authorization'] = `Bearer ${this.bearerToken}`;

    let request: RequestInit = { ...options, headers };
    for (const interceptor of this.requestInterceptors) {
      request = await interceptor(request);
    }

    let lastError: unknown = new Error('Request was not sent');
    for (let attempt = 0; attempt <= this.maxRetries; attempt++) {
      try {
        const response = await fetch(url, request);
        const text = await response.text();
        let data: unknown = undefined;
        if (text) {
          try {
            data = JSON.parse(text);
          } catch {
            data = text;
          }
        }

        if (!response.ok) {
          throw new HttpError(
            response.status,
            `API error: ${response.status} ${response.statusText}`,
            data,
          );
        }

        for (const interceptor of this.responseInterceptors) {
          data = await interceptor(response, data);
        }
        return data as T;
      } catch (error) {
        lastError = error;
        if (attempt < this.maxRetries) {
          await sleep(this.retryDelay * Math.pow(2, attempt));
        }
      }
    }

    throw lastError;
  }

  private async sendRequest<TData, TStatus extends number = number>(
    method: string,
    url: string,
    body: unknown,
    headers: Record<string, string>,
  ): Promise<ApiResult<TData, TStatus>> {
    const options: RequestInit = { method, headers };
    if (body !== undefined) options.body = JSON.stringify(body);

    try {
      const data = await this.internalFetch<TData>(url, options);
      return { _tag: 'Success', data };
    } catch (error) {
      if (error instanceof HttpError) {
        return {
          _tag: 'ApiError',
          status: error.status as TStatus,
          message: error.message,
          data: error.data,
        };
      }
      return {
        _tag: 'ApiError',
        status: 0 as TStatus,
        message: error instanceof Error ? error.message : String(error),
      };
    }
  }"""

    client_class_close = """}}

export default {class_name};
"""

    example_header = """/**
 * Example usage of the generated {class_name}
 *
 * Run with:
 *   npx tsx {example_file_name}
 *
 * {api_key_note}
 */

import {{ {class_name} }} from './{client_file_name}';
"""

    example_footer = """  } catch (error) {
    console.error('Error:', error);
  }
}

examples().catch(console.error);
"""

    index_html = """<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="utf-8">
  <title>OpenAPI TypeScript client generator</title>
</head>
<body>
  <h1>OpenAPI &rarr; TypeScript client</h1>
  <form id="generate">
    <p><label>Spec or endpoint URL <input name="customUrl" size="80"></label></p>
    <p><label>OpenAPI JSON<br><textarea name="spec" rows="16" cols="100"></textarea></label></p>
    <p><label>API key <input name="apiKey"></label></p>
    <button type="submit">Generate</button>
  </form>
  <pre id="output"></pre>
  <script>
    document.getElementById('generate').addEventListener('submit', async (event) => {
      event.preventDefault();
      const form = new FormData(event.target);
      const payload = { apiKey: form.get('apiKey') || undefined };
      if (form.get('customUrl')) payload.customUrl = form.get('customUrl');
      if (form.get('spec')) payload.spec = JSON.parse(form.get('spec'));
      const response = await fetch('/api/generate', {
        method: 'POST',
        headers: { 'Content-Type': 'application/json' },
        body: JSON.stringify(payload),
      });
      const result = await response.json();
      document.getElementById('output').textContent = result.clientCode || result.error;
    });
  </script>
</body>
</html>
"""


templates = Templates()
